"""category_schemas: 카테고리 관련 Pydantic 모델 모듈.

카테고리 생성/수정 요청 스키마와 API 문서용 응답 스키마를 정의합니다.
문자열 필드는 앞뒤 공백을 먼저 제거한 뒤 길이를 검사합니다.
"""

from pydantic import BaseModel, ConfigDict, Field


NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

_CATEGORY_EXAMPLE = {
    "name": "swagger name category",
    "description": "swagger description category",
}


class CreateCategoryRequest(BaseModel):
    """카테고리 생성 요청 모델.

    Attributes:
        name: 카테고리 이름 (공백 제거 후 1~100자).
        description: 카테고리 설명 (공백 제거 후 1~500자).
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={"example": _CATEGORY_EXAMPLE},
    )

    name: str = Field(
        ...,
        min_length=1,
        max_length=NAME_MAX_LENGTH,
        description="This is the name of the category",
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="This is the description of the category",
    )


class UpdateCategoryRequest(BaseModel):
    """카테고리 수정 요청 모델.

    두 필드 모두 선택이며, 전달된 필드만 수정합니다.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={"example": _CATEGORY_EXAMPLE},
    )

    name: str | None = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(
        None, min_length=1, max_length=DESCRIPTION_MAX_LENGTH
    )


# ============ API 문서용 응답 스키마 ============


class CategoryOut(BaseModel):
    """응답 본문에 담기는 카테고리."""

    id: int = Field(..., examples=[1])
    name: str = Field(..., examples=["string"])
    description: str = Field(..., examples=["string"])
    createdAt: str | None = Field(None, examples=["2022-11-10T21:45:49Z"])
    updatedAt: str | None = Field(None, examples=["2022-11-10T21:45:49Z"])


class CategoryResponse(BaseModel):
    """단일 카테고리 응답 envelope."""

    status: bool = True
    code: int = 200
    message: str
    body: CategoryOut
    timestamp: str


class CategoryListResponse(BaseModel):
    """카테고리 목록 응답 envelope."""

    status: bool = True
    code: int = 200
    message: str
    body: list[CategoryOut]
    timestamp: str


class ErrorResponse(BaseModel):
    """에러 응답 envelope."""

    status: bool = False
    code: int
    message: str
    body: None = None
    errors: list[dict] = []
    timestamp: str
