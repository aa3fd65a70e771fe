"""models: 데이터 클래스 및 데이터 관리 함수 패키지.

카테고리와 사용자 데이터 모델, MySQL 데이터베이스 관리 함수를 제공합니다.
"""

from .user_models import (
    User,
    get_user_by_id,
    get_user_by_email,
)

from .category_models import (
    Category,
    get_all_categories,
    get_category_by_id,
    create_category,
    update_category,
    delete_category,
)

__all__ = [
    # 사용자 모델
    "User",
    "get_user_by_id",
    "get_user_by_email",
    # 카테고리 모델
    "Category",
    "get_all_categories",
    "get_category_by_id",
    "create_category",
    "update_category",
    "delete_category",
]
