"""user_models: 사용자 관련 데이터 모델 및 함수 모듈.

사용자 인증(user auth)과 로그인에 필요한 조회 함수를 제공합니다.
"""

from dataclasses import dataclass
from datetime import datetime

from database.connection import get_connection

@dataclass(frozen=True)
class User:
    """사용자 데이터 클래스.

    Attributes:
        id: 사용자 고유 식별자.
        email: 이메일 주소.
        password: bcrypt 해시 비밀번호.
        nickname: 닉네임.
        created_at: 생성 시간.
        updated_at: 수정 시간.
        deleted_at: 탈퇴 시간.
    """

    id: int
    email: str
    password: str
    nickname: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        """사용자가 활성화 상태인지 확인합니다."""
        return self.deleted_at is None

# 공통으로 사용되는 SELECT 필드
USER_SELECT_FIELDS = (
    "id, email, nickname, password, created_at, updated_at, deleted_at"
)

def _row_to_user(row: tuple) -> User:
    """데이터베이스 행을 User 객체로 변환합니다.

    Args:
        row: (id, email, nickname, password, created_at, updated_at, deleted_at)

    Returns:
        User 객체.
    """
    return User(
        id=row[0],
        email=row[1],
        nickname=row[2],
        password=row[3],
        created_at=row[4],
        updated_at=row[5],
        deleted_at=row[6],
    )

async def get_user_by_id(user_id: int) -> User | None:
    """ID로 탈퇴하지 않은 사용자를 조회합니다.

    Args:
        user_id: 조회할 사용자의 ID.

    Returns:
        사용자 객체, 없으면 None.
    """
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                SELECT {USER_SELECT_FIELDS}
                FROM user
                WHERE id = %s AND deleted_at IS NULL
                """,
                (user_id,),
            )
            row = await cur.fetchone()
            return _row_to_user(row) if row else None

async def get_user_by_email(email: str) -> User | None:
    """이메일로 탈퇴하지 않은 사용자를 조회합니다."""
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                SELECT {USER_SELECT_FIELDS}
                FROM user
                WHERE email = %s AND deleted_at IS NULL
                """,
                (email,),
            )
            row = await cur.fetchone()
            return _row_to_user(row) if row else None
