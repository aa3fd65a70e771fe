"""category_controller: 카테고리 관련 컨트롤러 모듈.

카테고리 생성, 목록/단건 조회, 수정, 삭제 요청을 처리합니다.
인증과 생성 요청 본문 검증은 라우터의 의존성에서 이미 끝난 상태로 호출됩니다.
"""

import logging

from fastapi import Request, status

from dependencies.request_context import get_request_timestamp
from dependencies.validation import read_request_body, validate_body
from models import category_models
from models.user_models import User
from schemas.category_schemas import CreateCategoryRequest, UpdateCategoryRequest
from schemas.common import create_response, serialize_category
from utils.exceptions import bad_request_error, not_found_error

logger = logging.getLogger("api")


def _check_category_id(category_id: int, timestamp: str) -> None:
    """카테고리 ID가 양의 정수인지 확인합니다."""
    if category_id < 1:
        raise bad_request_error(
            "invalid_category_id", timestamp, "Invalid ID supplied"
        )


async def create_category(
    category_data: CreateCategoryRequest,
    current_user: User,
    request: Request,
) -> dict:
    """새 카테고리를 생성합니다.

    Args:
        category_data: 검증된 생성 요청 (이름, 설명).
        current_user: 현재 인증된 사용자.
        request: FastAPI Request 객체.

    Returns:
        생성된 카테고리가 포함된 응답 딕셔너리.
    """
    timestamp = get_request_timestamp(request)

    category = await category_models.create_category(
        name=category_data.name,
        description=category_data.description,
    )
    logger.info(f"카테고리 생성: category_id={category.id}, user_id={current_user.id}")

    return create_response(
        status.HTTP_200_OK,
        "Category created successfully",
        body=serialize_category(category),
        timestamp=timestamp,
    )


async def get_categories(request: Request) -> dict:
    """카테고리 목록을 조회합니다."""
    timestamp = get_request_timestamp(request)

    categories = await category_models.get_all_categories()

    return create_response(
        status.HTTP_200_OK,
        "Categories retrieved successfully",
        body=[serialize_category(category) for category in categories],
        timestamp=timestamp,
    )


async def get_category(category_id: int, request: Request) -> dict:
    """ID로 카테고리를 조회합니다.

    Raises:
        HTTPException: 잘못된 ID면 400, 카테고리가 없으면 404.
    """
    timestamp = get_request_timestamp(request)
    _check_category_id(category_id, timestamp)

    category = await category_models.get_category_by_id(category_id)
    if not category:
        raise not_found_error("category", timestamp, "Category not found")

    return create_response(
        status.HTTP_200_OK,
        "Category retrieved successfully",
        body=serialize_category(category),
        timestamp=timestamp,
    )


async def update_category(
    category_id: int,
    current_user: User,
    request: Request,
) -> dict:
    """카테고리를 수정합니다.

    수정 라우트에는 스키마 검증 의존성이 없으므로 본문은 여기서 읽고 검증합니다.
    전달된 필드(name, description)만 수정합니다.

    Args:
        category_id: 수정할 카테고리 ID.
        current_user: 현재 인증된 사용자.
        request: FastAPI Request 객체.

    Returns:
        수정된 카테고리가 포함된 응답 딕셔너리.

    Raises:
        HTTPException: 잘못된 ID/본문이거나 수정할 필드가 없으면 400,
            카테고리가 없으면 404.
    """
    timestamp = get_request_timestamp(request)
    _check_category_id(category_id, timestamp)

    data = await read_request_body(request)
    update_data = validate_body(UpdateCategoryRequest, data, timestamp)

    changes = update_data.model_dump(exclude_none=True)
    if not changes:
        raise bad_request_error(
            "no_changes_provided",
            timestamp,
            "At least one of name or description must be provided",
        )

    category = await category_models.update_category(category_id, **changes)
    if not category:
        raise not_found_error("category", timestamp, "Category not found")

    logger.info(
        f"카테고리 수정: category_id={category_id}, user_id={current_user.id}, "
        f"fields={sorted(changes)}"
    )

    return create_response(
        status.HTTP_200_OK,
        "Category updated successfully",
        body=serialize_category(category),
        timestamp=timestamp,
    )


async def delete_category(
    category_id: int,
    current_user: User,
    request: Request,
) -> dict:
    """카테고리를 삭제합니다.

    Returns:
        삭제된 카테고리가 포함된 응답 딕셔너리.

    Raises:
        HTTPException: 잘못된 ID면 400, 카테고리가 없으면 404.
    """
    timestamp = get_request_timestamp(request)
    _check_category_id(category_id, timestamp)

    category = await category_models.delete_category(category_id)
    if not category:
        raise not_found_error("category", timestamp, "Category not found")

    logger.info(f"카테고리 삭제: category_id={category_id}, user_id={current_user.id}")

    return create_response(
        status.HTTP_200_OK,
        "Category deleted successfully",
        body=serialize_category(category),
        timestamp=timestamp,
    )
