"""routers: FastAPI 라우터 패키지.

인증과 카테고리 API 엔드포인트를 정의하는 라우터 모듈을 제공합니다.
"""

from .auth_router import auth_router
from .category_router import category_router

__all__ = [
    "auth_router",
    "category_router",
]
