"""jwt_utils: JWT 생성 및 검증 유틸리티 모듈.

카테고리 API의 토큰 인증에 쓰이는 Access Token (HS256 JWT)을 발급하고 검증합니다.
"""

from datetime import datetime, timedelta, timezone

import jwt

from core.config import settings
from utils.exceptions import unauthorized_error

_JWT_ALGORITHM = "HS256"


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _timestamp() -> str:
    return _now_utc().strftime("%Y-%m-%dT%H:%M:%SZ")


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """Access Token을 생성합니다.

    PII(이메일, 닉네임 등)는 포함하지 않고 사용자 ID(sub)만 담습니다.

    Args:
        user_id: 토큰 소유자 ID.
        expires_delta: 만료까지의 시간 (기본: settings.JWT_ACCESS_EXPIRE_MINUTES).
    """
    now = _now_utc()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_ACCESS_EXPIRE_MINUTES)
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
        "type": "access",
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=_JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Access Token을 디코딩하고 클레임을 반환합니다.

    Raises:
        HTTPException 401: 토큰이 만료되었거나(token_expired) 유효하지 않은 경우(token_invalid).
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[_JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise unauthorized_error("token_expired", _timestamp(), "Access token has expired")
    except jwt.PyJWTError:
        raise unauthorized_error("token_invalid", _timestamp(), "Access token is invalid")

    if payload.get("type") != "access":
        raise unauthorized_error("token_invalid", _timestamp(), "Access token is invalid")

    # sub 클레임 존재 및 정수 변환 가능 여부 검증
    try:
        int(payload.get("sub"))
    except (ValueError, TypeError):
        raise unauthorized_error("token_invalid", _timestamp(), "Access token is invalid")

    return payload
