"""locustfile.py: 카테고리 API 부하 테스트.

도구: Locust (Python)

사전 준비:
    1. uv pip install locust
    2. seed_data.py로 테스트 계정이 대상 DB에 존재해야 합니다.
       (user1@example.com ~ user250@example.com / Test1234!)

실행:
    # UI 모드 (브라우저에서 localhost:8089 접속)
    locust -f load_tests/locustfile.py --host=http://127.0.0.1:8000

    # Headless 모드
    locust -f load_tests/locustfile.py --host=http://127.0.0.1:8000 \
        --users=100 --spawn-rate=5 --run-time=5m --headless

    # 특정 사용자 프로필만 실행
    locust -f load_tests/locustfile.py --host=http://127.0.0.1:8000 ReaderUser

주의사항:
    - Access Token은 기본 30분 후 만료됩니다. 그보다 긴 테스트에서는
      401 비율 증가를 감안하여 결과를 분석하세요.
"""

import itertools
import logging
import random
import threading

from locust import HttpUser, between, task
from locust.exception import StopUser

logger = logging.getLogger(__name__)

ACCOUNT_COUNT = 250
ACCOUNT_EMAIL_PATTERN = "user{}@example.com"
ACCOUNT_PASSWORD = "Test1234!"
REQUEST_TIMEOUT = 10

# 여러 greenlet이 같은 계정으로 로그인하지 않도록 순환 배분
_account_counter = itertools.count(1)
_account_lock = threading.Lock()


def _next_account() -> dict:
    with _account_lock:
        index = (next(_account_counter) - 1) % ACCOUNT_COUNT + 1
    return {"email": ACCOUNT_EMAIL_PATTERN.format(index), "password": ACCOUNT_PASSWORD}


class CategoryApiUser(HttpUser):
    """카테고리 API 사용자 기반 클래스.

    on_start(): 계정 확보 → 로그인 → Bearer 토큰 세팅
    하위 클래스에서 @task와 wait_time만 정의하면 됩니다.
    """

    abstract = True

    def on_start(self) -> None:
        self._account = _next_account()
        self._access_token = ""
        self._known_ids: list[int] = []

        with self.client.post(
            "/auth/session",
            json=self._account,
            timeout=REQUEST_TIMEOUT,
            catch_response=True,
            name="/auth/session [login]",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"로그인 실패: {resp.status_code}")
                logger.error(f"로그인 실패: {self._account['email']} (HTTP {resp.status_code})")
                raise StopUser()
            self._access_token = resp.json()["body"]["access_token"]
            resp.success()

    def _auth_headers(self) -> dict:
        return {"Authorization": f"Bearer {self._access_token}"}

    def _list_categories(self) -> None:
        """목록을 조회하고 카테고리 ID를 기억합니다."""
        with self.client.get(
            "/categories",
            headers=self._auth_headers(),
            timeout=REQUEST_TIMEOUT,
            catch_response=True,
            name="/categories [list]",
        ) as resp:
            if resp.status_code == 200:
                self._known_ids = [c["id"] for c in resp.json()["body"]]
                resp.success()
            else:
                resp.failure(f"목록 조회 실패: {resp.status_code}")

    def _get_category(self) -> None:
        if not self._known_ids:
            self._list_categories()
            return
        category_id = random.choice(self._known_ids)
        with self.client.get(
            f"/categories/{category_id}",
            headers=self._auth_headers(),
            timeout=REQUEST_TIMEOUT,
            catch_response=True,
            name="/categories/{id} [get]",
        ) as resp:
            # 다른 Writer가 먼저 삭제한 경우 404는 정상
            if resp.status_code in (200, 404):
                resp.success()
            else:
                resp.failure(f"상세 조회 실패: {resp.status_code}")


class ReaderUser(CategoryApiUser):
    """목록/상세 조회만 수행하는 사용자."""

    weight = 4
    wait_time = between(1, 3)

    @task(1)
    def list_categories(self) -> None:
        self._list_categories()

    @task(3)
    def get_category(self) -> None:
        self._get_category()


class WriterUser(CategoryApiUser):
    """카테고리를 생성/수정/삭제하는 사용자."""

    weight = 1
    wait_time = between(2, 5)

    @task(2)
    def create_update_delete(self) -> None:
        resp = self.client.post(
            "/categories",
            json={
                "name": f"load-{random.randint(1, 1_000_000)}",
                "description": "locust generated category",
            },
            headers=self._auth_headers(),
            timeout=REQUEST_TIMEOUT,
            name="/categories [create]",
        )
        if resp.status_code != 200:
            return
        category_id = resp.json()["body"]["id"]

        self.client.put(
            f"/categories/{category_id}",
            json={"description": "updated by locust"},
            headers=self._auth_headers(),
            timeout=REQUEST_TIMEOUT,
            name="/categories/{id} [update]",
        )
        self.client.delete(
            f"/categories/{category_id}",
            headers=self._auth_headers(),
            timeout=REQUEST_TIMEOUT,
            name="/categories/{id} [delete]",
        )

    @task(1)
    def browse(self) -> None:
        self._list_categories()
