"""auth_controller: 인증 관련 컨트롤러 모듈.

카테고리 API 호출에 필요한 Access Token을 발급하는 로그인과
현재 사용자 조회 기능을 제공합니다.
"""

import asyncio
import logging

from fastapi import Request, status

from dependencies.request_context import get_request_timestamp
from models import user_models
from models.user_models import User
from schemas.auth_schemas import LoginRequest
from schemas.common import create_response, serialize_user
from utils.exceptions import unauthorized_error
from utils.jwt_utils import create_access_token
from utils.password import verify_password

logger = logging.getLogger("api")

# 타이밍 공격 방지: 존재하지 않는 사용자에 대해서도 bcrypt 비교를 수행하여 응답 시간 차이로
# 사용자 존재 여부가 노출되지 않도록 함
_TIMING_ATTACK_DUMMY_HASH = (
    "$2b$12$EixZaYVK1fsbw1ZfbX3OXePaWxwKc.60VF.wdz.xGto8.H82o.f2y"
)


async def login(credentials: LoginRequest, request: Request) -> dict:
    """이메일과 비밀번호를 사용하여 로그인합니다.

    Args:
        credentials: 로그인 자격 증명 (이메일, 비밀번호).
        request: FastAPI Request 객체.

    Returns:
        access_token과 사용자 정보가 포함된 응답 딕셔너리.

    Raises:
        HTTPException: 인증 실패 시 401 Unauthorized.
    """
    timestamp = get_request_timestamp(request)

    user = await user_models.get_user_by_email(credentials.email)

    password_valid = await asyncio.to_thread(
        verify_password,
        credentials.password,
        user.password if user else _TIMING_ATTACK_DUMMY_HASH,
    )

    if not user or not password_valid:
        logger.info(f"로그인 실패: email={credentials.email}")
        raise unauthorized_error(
            "unauthorized", timestamp, "Invalid email or password"
        )

    access_token = create_access_token(user_id=user.id)

    return create_response(
        status.HTTP_200_OK,
        "Login successful",
        body={"access_token": access_token, "user": serialize_user(user)},
        timestamp=timestamp,
    )


async def get_my_info(current_user: User, request: Request) -> dict:
    """현재 로그인 중인 사용자의 정보를 반환합니다."""
    return create_response(
        status.HTTP_200_OK,
        "User retrieved successfully",
        body=serialize_user(current_user),
        timestamp=get_request_timestamp(request),
    )
