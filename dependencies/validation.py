"""validation: 요청 본문 스키마 검증 의존성 모듈.

JSON 또는 폼 형식의 요청 본문을 딕셔너리로 읽고 Pydantic 모델로 검증합니다.
라우터에서 인증 의존성보다 앞에 두면 잘못된 본문은 인증 전에 거부됩니다.
"""

from typing import Any, Awaitable, Callable, TypeVar

from fastapi import HTTPException, Request, status
from pydantic import BaseModel, ValidationError

from dependencies.request_context import get_request_timestamp
from utils.exceptions import bad_request_error, unsupported_media_type_error

ModelT = TypeVar("ModelT", bound=BaseModel)

JSON_CONTENT_TYPES = {"application/json"}
FORM_CONTENT_TYPES = {"application/x-www-form-urlencoded", "multipart/form-data"}


async def read_request_body(request: Request) -> dict[str, Any]:
    """요청 본문을 딕셔너리로 읽습니다.

    Content-Type이 없거나 application/json이면 JSON으로,
    폼 형식이면 폼 필드로 해석합니다. 빈 본문은 빈 딕셔너리입니다.

    Args:
        request: FastAPI Request 객체.

    Returns:
        본문 딕셔너리.

    Raises:
        HTTPException: JSON 파싱 실패 또는 객체가 아닌 JSON이면 400,
            지원하지 않는 Content-Type이면 415.
    """
    timestamp = get_request_timestamp(request)
    raw_content_type = request.headers.get("content-type", "")
    content_type = raw_content_type.split(";")[0].strip().lower()

    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items()}

    if content_type and content_type not in JSON_CONTENT_TYPES:
        raise unsupported_media_type_error(content_type, timestamp)

    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        data = await request.json()
    except ValueError:
        raise bad_request_error(
            "invalid_request_body", timestamp, "Request body is not valid JSON"
        )

    if not isinstance(data, dict):
        raise bad_request_error(
            "invalid_request_body", timestamp, "Request body must be a JSON object"
        )
    return data


def _format_errors(exc: ValidationError) -> list[dict[str, str]]:
    """Pydantic 검증 오류를 직렬화 가능한 필드/메시지 목록으로 변환합니다."""
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]) or "body",
            "message": error["msg"],
        }
        for error in exc.errors()
    ]


def validate_body(
    schema: type[ModelT], data: dict[str, Any], timestamp: str
) -> ModelT:
    """딕셔너리를 스키마로 검증합니다.

    Raises:
        HTTPException: 검증 실패 시 400 invalid_request_body.
    """
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        fields = _format_errors(exc)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "invalid_request_body",
                "message": "; ".join(f"{f['field']}: {f['message']}" for f in fields),
                "fields": fields,
                "timestamp": timestamp,
            },
        )


def validate_request_schema(
    schema: type[ModelT],
) -> Callable[[Request], Awaitable[ModelT]]:
    """요청 본문을 주어진 스키마로 검증하는 의존성을 생성합니다.

    사용 예시:
        validate_create_category = validate_request_schema(CreateCategoryRequest)

        @router.post("")
        async def create(data: CreateCategoryRequest = Depends(validate_create_category)):
            ...

    Args:
        schema: 본문을 검증할 Pydantic 모델 클래스.

    Returns:
        검증된 모델 인스턴스를 반환하는 FastAPI 의존성 함수.
    """

    async def _validate(request: Request) -> ModelT:
        data = await read_request_body(request)
        return validate_body(schema, data, get_request_timestamp(request))

    _validate.__name__ = f"validate_{schema.__name__}"
    _validate.__qualname__ = f"validate_request_schema.{_validate.__name__}"
    return _validate
