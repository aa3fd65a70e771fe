"""category_models: 카테고리 관련 데이터 모델 및 함수 모듈."""

from dataclasses import dataclass
from datetime import datetime

from database.connection import get_connection, transactional


# SQL Injection 방지: 허용된 컬럼명 whitelist
ALLOWED_CATEGORY_COLUMNS = {"name", "description"}

CATEGORY_SELECT_FIELDS = "id, name, description, created_at, updated_at"


@dataclass(frozen=True)
class Category:
    """카테고리 데이터 클래스.

    Attributes:
        id: 카테고리 고유 식별자.
        name: 카테고리 이름.
        description: 카테고리 설명.
        created_at: 생성 시간.
        updated_at: 수정 시간.
    """

    id: int
    name: str
    description: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


def _row_to_category(row: tuple) -> Category:
    """데이터베이스 행을 Category 객체로 변환합니다."""
    return Category(
        id=row[0],
        name=row[1],
        description=row[2],
        created_at=row[3],
        updated_at=row[4],
    )


async def get_all_categories() -> list[Category]:
    """모든 카테고리를 ID 순으로 조회합니다."""
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"SELECT {CATEGORY_SELECT_FIELDS} FROM category ORDER BY id ASC"
            )
            rows = await cur.fetchall()
            return [_row_to_category(row) for row in rows]


async def get_category_by_id(category_id: int) -> Category | None:
    """ID로 카테고리를 조회합니다."""
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"SELECT {CATEGORY_SELECT_FIELDS} FROM category WHERE id = %s",
                (category_id,),
            )
            row = await cur.fetchone()
            return _row_to_category(row) if row else None


async def create_category(name: str, description: str) -> Category:
    """새 카테고리를 생성합니다.

    INSERT 후 같은 트랜잭션에서 다시 조회하여
    데이터베이스가 채운 생성/수정 시간을 포함한 객체를 반환합니다.

    Args:
        name: 카테고리 이름.
        description: 카테고리 설명.

    Returns:
        생성된 카테고리 객체.
    """
    async with transactional() as cur:
        await cur.execute(
            "INSERT INTO category (name, description) VALUES (%s, %s)",
            (name, description),
        )
        category_id = cur.lastrowid
        await cur.execute(
            f"SELECT {CATEGORY_SELECT_FIELDS} FROM category WHERE id = %s",
            (category_id,),
        )
        row = await cur.fetchone()
        return _row_to_category(row)


async def update_category(category_id: int, **fields: str) -> Category | None:
    """카테고리를 수정합니다.

    Args:
        category_id: 수정할 카테고리 ID.
        **fields: 수정할 컬럼과 값 (name, description).

    Returns:
        수정된 카테고리 객체, 카테고리가 없으면 None.

    Raises:
        ValueError: 허용되지 않은 컬럼이 포함된 경우.
    """
    invalid = set(fields) - ALLOWED_CATEGORY_COLUMNS
    if invalid:
        raise ValueError(f"허용되지 않은 컬럼: {sorted(invalid)}")

    async with transactional() as cur:
        await cur.execute(
            "SELECT id FROM category WHERE id = %s FOR UPDATE", (category_id,)
        )
        if not await cur.fetchone():
            return None

        if fields:
            set_clause = ", ".join(f"{column} = %s" for column in fields)
            await cur.execute(
                f"UPDATE category SET {set_clause} WHERE id = %s",
                (*fields.values(), category_id),
            )

        await cur.execute(
            f"SELECT {CATEGORY_SELECT_FIELDS} FROM category WHERE id = %s",
            (category_id,),
        )
        row = await cur.fetchone()
        return _row_to_category(row)


async def delete_category(category_id: int) -> Category | None:
    """카테고리를 삭제하고 삭제된 행을 반환합니다.

    Returns:
        삭제된 카테고리 객체, 카테고리가 없으면 None.
    """
    async with transactional() as cur:
        await cur.execute(
            f"SELECT {CATEGORY_SELECT_FIELDS} FROM category WHERE id = %s FOR UPDATE",
            (category_id,),
        )
        row = await cur.fetchone()
        if not row:
            return None

        await cur.execute("DELETE FROM category WHERE id = %s", (category_id,))
        return _row_to_category(row)
