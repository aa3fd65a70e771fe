"""exceptions: API 에러 응답 생성 헬퍼 모듈.

자주 사용되는 HTTP 에러를 `{"error", "message", "timestamp"}` 형식의
detail을 가진 HTTPException으로 생성합니다.
전역 핸들러가 이 detail을 표준 에러 응답으로 감쌉니다.
"""

from fastapi import HTTPException, status


def _error_detail(
    error_code: str, timestamp: str, message: str | None = None
) -> dict:
    detail = {
        "error": error_code,
        "timestamp": timestamp,
    }
    if message:
        detail["message"] = message
    return detail


def bad_request_error(
    error_code: str, timestamp: str, message: str | None = None
) -> HTTPException:
    """잘못된 요청에 대한 400 에러를 생성합니다.

    Args:
        error_code: 에러 코드 (예: 'invalid_category_id', 'no_changes_provided').
        timestamp: 요청 타임스탬프.
        message: 사용자에게 표시할 메시지 (선택).

    Returns:
        HTTPException: 400 Bad Request 예외.
    """
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=_error_detail(error_code, timestamp, message),
    )


def unauthorized_error(
    error_code: str, timestamp: str, message: str | None = None
) -> HTTPException:
    """인증 실패 시 401 에러를 생성합니다.

    Args:
        error_code: 에러 코드 (예: 'unauthorized', 'token_expired').
        timestamp: 요청 타임스탬프.
        message: 사용자에게 표시할 메시지 (선택).

    Returns:
        HTTPException: 401 Unauthorized 예외.
    """
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=_error_detail(error_code, timestamp, message),
        headers={"WWW-Authenticate": "Bearer"},
    )


def not_found_error(
    resource: str, timestamp: str, message: str | None = None
) -> HTTPException:
    """리소스를 찾을 수 없을 때 404 에러를 생성합니다.

    Args:
        resource: 리소스 이름 (예: 'user', 'category').
        timestamp: 요청 타임스탬프.
        message: 사용자에게 표시할 메시지 (선택).

    Returns:
        HTTPException: 404 Not Found 예외.
    """
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=_error_detail(f"{resource}_not_found", timestamp, message),
    )


def unsupported_media_type_error(
    content_type: str, timestamp: str
) -> HTTPException:
    """처리할 수 없는 요청 본문 형식일 때 415 에러를 생성합니다."""
    return HTTPException(
        status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
        detail=_error_detail(
            "unsupported_media_type",
            timestamp,
            f"Unsupported content type: {content_type}",
        ),
    )
