"""category_router: 카테고리 관련 라우터 모듈.

카테고리 CRUD 엔드포인트를 등록합니다. 각 엔드포인트 앞에 놓이는
의존성(스키마 검증 → 토큰 인증 → 사용자 인증)은 선언된 순서대로 실행되며,
앞 단계가 실패하면 뒤 단계와 컨트롤러는 실행되지 않습니다.

| Method | Path                   | 의존성 순서                          |
|--------|------------------------|--------------------------------------|
| POST   | /categories            | 스키마 검증 → 토큰 인증 → 사용자 인증 |
| GET    | /categories            | 토큰 인증                            |
| GET    | /categories/{id}       | 토큰 인증                            |
| PUT    | /categories/{id}       | 토큰 인증 → 사용자 인증               |
| DELETE | /categories/{id}       | 토큰 인증 → 사용자 인증               |

`/categories/` 요청도 리다이렉트 없이 같은 핸들러와 의존성 체인으로 처리합니다
(API 문서에는 노출하지 않음).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, status

from controllers import category_controller
from dependencies.auth import get_current_user, verify_user_token
from dependencies.validation import validate_request_schema
from models.user_models import User
from schemas.category_schemas import (
    CategoryListResponse,
    CategoryResponse,
    CreateCategoryRequest,
    ErrorResponse,
    UpdateCategoryRequest,
)
from schemas.common import request_body_openapi


category_router = APIRouter(prefix="/categories", tags=["Categories"])
"""카테고리 관련 라우터 인스턴스."""

validate_create_category = validate_request_schema(CreateCategoryRequest)
"""카테고리 생성 요청 본문 검증 의존성."""

_CATEGORY_EXAMPLE = {
    "name": "swagger name category",
    "description": "swagger description category",
}

_UNAUTHORIZED = {"model": ErrorResponse, "description": "Missing, invalid or expired access token"}
_SERVER_ERROR = {"model": ErrorResponse, "description": "error of server"}

CategoryId = Annotated[int, Path(description="ID of category", examples=[1])]


@category_router.post("/", include_in_schema=False)
@category_router.post(
    "",
    status_code=status.HTTP_200_OK,
    summary="create a new category",
    description="Add a new category",
    openapi_extra=request_body_openapi(
        CreateCategoryRequest, "Create a new category", _CATEGORY_EXAMPLE
    ),
    responses={
        200: {"model": CategoryResponse, "description": "successful operation"},
        400: {"model": ErrorResponse, "description": "Invalid request body"},
        401: _UNAUTHORIZED,
        404: {"model": ErrorResponse, "description": "not Found ID user"},
        415: {"model": ErrorResponse, "description": "Unsupported request body type"},
        500: _SERVER_ERROR,
    },
)
async def create_category(
    request: Request,
    category_data: CreateCategoryRequest = Depends(validate_create_category),
    token_payload: dict = Depends(verify_user_token),
    current_user: User = Depends(get_current_user),
) -> dict:
    """새 카테고리를 생성합니다.

    Args:
        request: FastAPI Request 객체.
        category_data: 검증된 생성 요청 (이름, 설명).
        token_payload: 검증된 Access Token 클레임.
        current_user: 현재 인증된 사용자.

    Returns:
        생성된 카테고리가 포함된 응답.
    """
    return await category_controller.create_category(
        category_data, current_user, request
    )


@category_router.get(
    "/", include_in_schema=False, dependencies=[Depends(verify_user_token)]
)
@category_router.get(
    "",
    status_code=status.HTTP_200_OK,
    summary="returns the list of all categories",
    dependencies=[Depends(verify_user_token)],
    responses={
        200: {"model": CategoryListResponse, "description": "the list of categories"},
        401: _UNAUTHORIZED,
        500: _SERVER_ERROR,
    },
)
async def get_categories(request: Request) -> dict:
    """카테고리 목록을 조회합니다."""
    return await category_controller.get_categories(request)


@category_router.get(
    "/{category_id}",
    status_code=status.HTTP_200_OK,
    summary="Find category by ID",
    dependencies=[Depends(verify_user_token)],
    responses={
        200: {"model": CategoryResponse, "description": "successful operation"},
        400: {"model": ErrorResponse, "description": "Invalid ID supplied"},
        401: _UNAUTHORIZED,
        404: {"model": ErrorResponse, "description": "category not found"},
        500: _SERVER_ERROR,
    },
)
async def get_category(request: Request, category_id: CategoryId) -> dict:
    """ID로 카테고리를 조회합니다.

    Args:
        request: FastAPI Request 객체.
        category_id: 조회할 카테고리 ID.
    """
    return await category_controller.get_category(category_id, request)


@category_router.put(
    "/{category_id}",
    status_code=status.HTTP_200_OK,
    summary="Update an existing category",
    description="Update an existing category by Id",
    openapi_extra=request_body_openapi(
        UpdateCategoryRequest, "Update a category", _CATEGORY_EXAMPLE
    ),
    responses={
        200: {"model": CategoryResponse, "description": "successful operation"},
        400: {"model": ErrorResponse, "description": "Invalid ID supplied"},
        401: _UNAUTHORIZED,
        404: {"model": ErrorResponse, "description": "category not found"},
        500: _SERVER_ERROR,
    },
)
async def update_category(
    request: Request,
    category_id: CategoryId,
    token_payload: dict = Depends(verify_user_token),
    current_user: User = Depends(get_current_user),
) -> dict:
    """카테고리를 수정합니다.

    Args:
        request: FastAPI Request 객체.
        category_id: 수정할 카테고리 ID.
        token_payload: 검증된 Access Token 클레임.
        current_user: 현재 인증된 사용자.
    """
    return await category_controller.update_category(
        category_id, current_user, request
    )


@category_router.delete(
    "/{category_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete a category",
    description="Delete a category",
    responses={
        200: {"model": CategoryResponse, "description": "successful operation"},
        400: {"model": ErrorResponse, "description": "Invalid ID supplied"},
        401: _UNAUTHORIZED,
        404: {"model": ErrorResponse, "description": "category not found"},
        500: _SERVER_ERROR,
    },
)
async def delete_category(
    request: Request,
    category_id: CategoryId,
    token_payload: dict = Depends(verify_user_token),
    current_user: User = Depends(get_current_user),
) -> dict:
    """카테고리를 삭제합니다.

    Args:
        request: FastAPI Request 객체.
        category_id: 삭제할 카테고리 ID.
        token_payload: 검증된 Access Token 클레임.
        current_user: 현재 인증된 사용자.
    """
    return await category_controller.delete_category(
        category_id, current_user, request
    )
