"""auth: FastAPI 의존성 주입을 위한 인증 모듈.

카테고리 라우터가 조합하는 두 단계의 인증 의존성을 제공합니다.

- verify_user_token: Bearer Access Token 검증 (토큰 인증, DB 조회 없음)
- get_current_user: 토큰의 사용자가 실제로 존재하는지 확인 (사용자 인증)

get_current_user는 verify_user_token에 의존하므로 항상 토큰 인증 뒤에 실행됩니다.
같은 요청 안에서 verify_user_token의 결과는 FastAPI가 캐시하므로 한 번만 실행됩니다.
"""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from dependencies.request_context import get_request_timestamp
from models import user_models
from models.user_models import User
from utils.exceptions import not_found_error, unauthorized_error
from utils.jwt_utils import decode_access_token

logger = logging.getLogger("api")

# auto_error=False: 헤더 누락 시 403 대신 표준 401 에러 응답을 직접 반환하기 위함
bearer_scheme = HTTPBearer(auto_error=False)


async def verify_user_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """Authorization 헤더의 Bearer Access Token을 검증합니다.

    검증에 성공하면 사용자 ID를 request.state.user_id에 저장합니다.

    Args:
        request: FastAPI Request 객체.
        credentials: HTTPBearer가 추출한 인증 정보 (없으면 None).

    Returns:
        디코딩된 토큰 클레임.

    Raises:
        HTTPException: 토큰이 없으면 401 unauthorized,
            만료되었으면 401 token_expired, 유효하지 않으면 401 token_invalid.
    """
    if credentials is None or not credentials.credentials:
        raise unauthorized_error(
            "unauthorized",
            get_request_timestamp(request),
            "Authorization header with a Bearer token is required",
        )

    payload = decode_access_token(credentials.credentials)
    request.state.user_id = int(payload["sub"])
    return payload


async def get_current_user(
    request: Request,
    token_payload: dict = Depends(verify_user_token),
) -> User:
    """토큰이 가리키는 사용자를 조회하여 반환합니다.

    Args:
        request: FastAPI Request 객체.
        token_payload: verify_user_token이 반환한 클레임.

    Returns:
        인증된 사용자 객체.

    Raises:
        HTTPException: 사용자가 없거나 탈퇴한 경우 404 user_not_found.
    """
    user_id = int(token_payload["sub"])
    user = await user_models.get_user_by_id(user_id)

    if not user or not user.is_active:
        logger.warning(f"유효한 토큰이지만 사용자를 찾을 수 없음: user_id={user_id}")
        raise not_found_error(
            "user", get_request_timestamp(request), "User not found"
        )

    return user
