import os
import sys
import tempfile

# 설정 로드 전에 테스트용 환경 변수 지정 (DB 연결은 모델 함수를 mock 하므로 사용하지 않음)
os.environ["TESTING"] = "true"
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-category-api-0123456789abcdef")
os.environ.setdefault("DB_HOST", "127.0.0.1")
os.environ.setdefault("DB_PORT", "3306")
os.environ.setdefault("DB_USER", "test")
os.environ.setdefault("DB_PASSWORD", "test")
os.environ.setdefault("DB_NAME", "category_test")
os.environ.setdefault(
    "ERROR_LOG_FILE", os.path.join(tempfile.gettempdir(), "category_api_test_error.log")
)

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from faker import Faker
from httpx import AsyncClient, ASGITransport

from main import app
from models.category_models import Category
from models.user_models import User
from utils.jwt_utils import create_access_token


@pytest_asyncio.fixture
async def client():
    """API 테스트를 위한 Async Client (인증 헤더 없음)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def fake():
    return Faker("ko_KR")


@pytest.fixture
def user(fake):
    """토큰 소유자로 사용할 활성 사용자."""
    return User(
        id=7,
        email=fake.lexify(text="????????").lower() + "@naver.com",
        password="$2b$12$hashedpassword",
        nickname=fake.lexify(text="?????") + str(fake.random_int(10, 99)),
    )


@pytest.fixture
def auth_headers(user):
    """user의 Access Token을 담은 Authorization 헤더."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def mock_user_lookup(user):
    """사용자 인증 단계의 DB 조회를 mock 합니다. 기본값은 user를 반환."""
    with patch(
        "dependencies.auth.user_models.get_user_by_id",
        new_callable=AsyncMock,
        return_value=user,
    ) as mock_get_user:
        yield mock_get_user


@pytest.fixture
def sample_category():
    return Category(
        id=1,
        name="Books",
        description="All kinds of books",
        created_at=datetime(2022, 11, 10, 21, 45, 49),
        updated_at=datetime(2022, 11, 10, 21, 45, 49),
    )


@pytest.fixture
def mock_category_models(sample_category):
    """카테고리 모델 함수를 모두 mock 합니다.

    각 mock은 기본적으로 sample_category(또는 그 목록)를 반환합니다.
    """
    prefix = "controllers.category_controller.category_models"
    with patch(f"{prefix}.get_all_categories", new_callable=AsyncMock, return_value=[sample_category]) as get_all, \
            patch(f"{prefix}.get_category_by_id", new_callable=AsyncMock, return_value=sample_category) as get_one, \
            patch(f"{prefix}.create_category", new_callable=AsyncMock, return_value=sample_category) as create, \
            patch(f"{prefix}.update_category", new_callable=AsyncMock, return_value=sample_category) as update, \
            patch(f"{prefix}.delete_category", new_callable=AsyncMock, return_value=sample_category) as delete:
        yield SimpleNamespace(
            get_all_categories=get_all,
            get_category_by_id=get_one,
            create_category=create,
            update_category=update,
            delete_category=delete,
        )
