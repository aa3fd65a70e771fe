"""exception_handler: 전역 예외 처리 핸들러 모듈.

HTTPException, 요청 유효성 검사 예외, 처리되지 않은 예외를
`{status, code, message, body, errors, timestamp}` 형식의 응답으로 변환합니다.
"""

import uuid
import logging
import traceback
from http import HTTPStatus
from logging.handlers import RotatingFileHandler

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from dependencies.request_context import get_request_timestamp
from schemas.common import create_error_response


logger = logging.getLogger("api")

# 에러 전용 파일 로거 설정
error_logger = logging.getLogger("api.error")
error_logger.setLevel(logging.ERROR)

# RotatingFileHandler: 10MB 단위로 로테이션, 최대 5개 백업 파일
if not error_logger.handlers:
    error_file_handler = RotatingFileHandler(
        settings.ERROR_LOG_FILE,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
        delay=True,
    )
    error_file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    )
    error_logger.addHandler(error_file_handler)


def _default_message(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """HTTPException을 표준 에러 응답으로 변환합니다.

    컨트롤러/의존성에서 발생한 예외뿐 아니라 라우팅 단계의
    404 (경로 없음), 405 (메서드 불일치)도 이 핸들러를 거칩니다.
    Allow, WWW-Authenticate 등 예외에 지정된 헤더는 그대로 유지합니다.

    Args:
        request: FastAPI Request 객체.
        exc: 발생한 HTTPException.

    Returns:
        exc.status_code를 상태 코드로 갖는 JSON 응답.
    """
    timestamp = get_request_timestamp(request)

    if isinstance(exc.detail, dict):
        detail = dict(exc.detail)
        detail.setdefault("timestamp", timestamp)
        message = detail.get("message") or _default_message(exc.status_code)
    else:
        message = str(exc.detail) if exc.detail else _default_message(exc.status_code)
        detail = {
            "error": _default_message(exc.status_code).lower().replace(" ", "_"),
            "message": message,
            "timestamp": timestamp,
        }

    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(
            create_error_response(exc.status_code, message, [detail], timestamp)
        ),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """요청 데이터 유효성 검사 예외 처리 핸들러.

    경로 파라미터 형식 오류(예: /categories/abc)나 JSON 본문 모델 검증 실패 시 호출되며,
    400 Bad Request로 응답합니다. 오류 정보에 바이너리 데이터나
    직렬화할 수 없는 ctx 값이 포함되면 문자열로 대체합니다.

    Args:
        request: FastAPI Request 객체.
        exc: 발생한 Validation 예외.

    Returns:
        400 Bad Request 에러 JSON 응답.
    """
    timestamp = get_request_timestamp(request)

    sanitized_errors = []
    for error in exc.errors():
        error_copy = dict(error)

        input_val = error_copy.get("input")
        if isinstance(input_val, bytes):
            error_copy["input"] = f"<binary data: {len(input_val)} bytes>"

        # field_validator에서 발생한 ValueError 등은 JSON 직렬화가 불가능
        if isinstance(error_copy.get("ctx"), dict):
            error_copy["ctx"] = {k: str(v) for k, v in error_copy["ctx"].items()}

        sanitized_errors.append(error_copy)

    path_errors = [e for e in sanitized_errors if e.get("loc", ())[:1] == ("path",)]
    error_code = "invalid_category_id" if path_errors else "invalid_request"
    message = "Invalid ID supplied" if path_errors else "Invalid request"

    detail = {
        "error": error_code,
        "message": message,
        "fields": sanitized_errors,
        "timestamp": timestamp,
    }

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(
            create_error_response(
                status.HTTP_400_BAD_REQUEST, message, [detail], timestamp
            )
        ),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """전역 예외 처리 핸들러.

    모든 예외를 잡아서 일관된 형식의 500 에러 응답을 반환합니다.
    프로덕션 환경(DEBUG=False)에서는 상세 에러 정보를 숨깁니다.

    Args:
        request: FastAPI Request 객체.
        exc: 발생한 예외.

    Returns:
        500 에러 JSON 응답.
    """
    tracking_id = str(uuid.uuid4())
    timestamp = get_request_timestamp(request)

    logger.error(f"[{tracking_id}] Unhandled exception: {exc}")

    error_logger.error(
        f"[{tracking_id}] {request.method} {request.url.path} "
        f"Unhandled exception: {exc}\n"
        f"{''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))}"
    )

    detail = {
        "error": "internal_server_error",
        "trackingID": tracking_id,
        "timestamp": timestamp,
    }

    # DEBUG 모드에서만 상세 정보 포함
    if settings.DEBUG:
        detail["detail"] = str(exc)

    content = create_error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        [detail],
        timestamp,
    )
    content["trackingID"] = tracking_id

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )
