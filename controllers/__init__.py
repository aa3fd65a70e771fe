"""controllers: 비즈니스 로직 및 요청 핸들러 패키지.

인증과 카테고리 관련 컨트롤러 모듈을 제공합니다.
"""

from . import auth_controller
from . import category_controller

__all__ = [
    "auth_controller",
    "category_controller",
]
