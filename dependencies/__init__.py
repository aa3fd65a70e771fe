"""dependencies: FastAPI 의존성 주입 패키지.

토큰/사용자 인증, 요청 본문 검증, 요청 컨텍스트 관련 의존성 함수를 제공합니다.
"""

from .auth import get_current_user, verify_user_token
from .request_context import get_request_timestamp, get_request_time
from .validation import read_request_body, validate_body, validate_request_schema

__all__ = [
    "get_current_user",
    "verify_user_token",
    "get_request_timestamp",
    "get_request_time",
    "read_request_body",
    "validate_body",
    "validate_request_schema",
]
