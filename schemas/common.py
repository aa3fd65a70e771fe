"""common: 공통 응답 유틸리티 모듈.

API 응답 생성 및 공통 데이터 변환 함수를 정의합니다.
모든 응답은 `{status, code, message, body}` 형식의 envelope로 감싸집니다.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from utils.formatters import format_datetime


def _now() -> str:
    return datetime.now().strftime("%Y-%m-%dT%H:%M:%SZ")


def create_response(
    code: int,
    message: str,
    body: Any = None,
    timestamp: str | None = None,
) -> dict[str, Any]:
    """표준 API 성공 응답 딕셔너리를 생성합니다.

    Args:
        code: HTTP 상태 코드 (예: 200).
        message: 사용자에게 표시할 메시지.
        body: 응답 데이터 (카테고리, 카테고리 목록 등).
        timestamp: 타임스탬프 (기본값: 현재 시간).

    Returns:
        표준 형식의 응답 딕셔너리.
    """
    return {
        "status": code < 400,
        "code": code,
        "message": message,
        "body": body,
        "timestamp": timestamp or _now(),
    }


def create_error_response(
    code: int,
    message: str,
    errors: list[Any] | None = None,
    timestamp: str | None = None,
) -> dict[str, Any]:
    """표준 API 에러 응답 딕셔너리를 생성합니다.

    Args:
        code: HTTP 상태 코드.
        message: 사용자에게 표시할 메시지.
        errors: 에러 상세 목록 (HTTPException detail 등).
        timestamp: 타임스탬프 (기본값: 현재 시간).
    """
    return {
        "status": False,
        "code": code,
        "message": message,
        "body": None,
        "errors": errors if errors is not None else [],
        "timestamp": timestamp or _now(),
    }


def serialize_category(category) -> dict[str, Any]:
    """Category 객체를 API 응답용 딕셔너리로 변환합니다.

    Args:
        category: Category 데이터 객체.

    Returns:
        카테고리 정보 딕셔너리 (createdAt/updatedAt은 camelCase).
    """
    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
        "createdAt": format_datetime(category.created_at),
        "updatedAt": format_datetime(category.updated_at),
    }


def serialize_user(user) -> dict[str, Any]:
    """User 객체를 API 응답용 딕셔너리로 변환합니다. 비밀번호는 제외합니다."""
    return {
        "id": user.id,
        "email": user.email,
        "nickname": user.nickname,
    }


def request_body_openapi(
    schema: type[BaseModel], description: str, example: dict[str, Any]
) -> dict[str, Any]:
    """`openapi_extra`에 넣을 requestBody 문서를 생성합니다.

    본문을 엔드포인트 파라미터가 아닌 의존성에서 직접 읽는 라우트는
    FastAPI가 requestBody를 자동으로 문서화하지 못하므로 이 함수로 채웁니다.
    """
    json_schema = schema.model_json_schema()
    media = {"schema": json_schema, "example": example}
    return {
        "requestBody": {
            "description": description,
            "required": True,
            "content": {
                "application/json": media,
                "application/x-www-form-urlencoded": media,
            },
        }
    }
