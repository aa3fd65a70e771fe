"""database.connection: MySQL 데이터베이스 연결 관리 모듈.

aiomysql 연결 풀 하나를 애플리케이션 전체에서 공유합니다.
카테고리/사용자 모델 함수는 모두 이 모듈을 통해 연결을 얻습니다.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import aiomysql

from core.config import settings

logger = logging.getLogger("api")

# 전역 연결 풀
_pool: aiomysql.Pool | None = None


async def init_db() -> None:
    """데이터베이스 연결 풀을 초기화합니다.

    lifespan 시작 시 호출됩니다.
    """
    global _pool
    try:
        _pool = await aiomysql.create_pool(
            host=settings.DB_HOST,
            port=settings.DB_PORT,
            user=settings.DB_USER,
            password=settings.DB_PASSWORD,
            db=settings.DB_NAME,
            charset="utf8mb4",
            autocommit=True,
            minsize=1,
            maxsize=10,
            connect_timeout=5,
        )
    except Exception:
        logger.exception(
            f"MySQL 연결 풀 초기화 실패: {settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
        )
        raise
    logger.info(
        f"MySQL 연결 풀 초기화 완료: {settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
    )


async def close_db() -> None:
    """데이터베이스 연결 풀을 종료합니다."""
    global _pool
    if _pool:
        _pool.close()
        await _pool.wait_closed()
        _pool = None
        logger.info("MySQL 연결 풀 종료")


def get_pool() -> aiomysql.Pool:
    """현재 연결 풀을 반환합니다.

    Raises:
        RuntimeError: 연결 풀이 초기화되지 않은 경우.
    """
    if _pool is None:
        raise RuntimeError("데이터베이스 연결 풀이 초기화되지 않았습니다.")
    return _pool


@asynccontextmanager
async def get_connection() -> AsyncGenerator[aiomysql.Connection, None]:
    """풀에서 연결 하나를 빌려 컨텍스트 매니저로 제공합니다.

    사용 예시:
        async with get_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT id, name FROM category")
                rows = await cur.fetchall()
    """
    pool = get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def transactional() -> AsyncGenerator[aiomysql.Cursor, None]:
    """트랜잭션 범위의 커서를 제공합니다.

    범위 안에서 예외가 발생하면 롤백하고, 정상 종료 시 커밋합니다.
    """
    pool = get_pool()
    async with pool.acquire() as conn:
        try:
            await conn.begin()
            async with conn.cursor() as cur:
                yield cur
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise


async def test_connection() -> bool:
    """`SELECT 1`로 데이터베이스 연결을 확인합니다.

    Returns:
        연결 성공 여부.
    """
    try:
        async with get_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT 1")
                await cur.fetchone()
                return True
    except Exception as e:
        logger.warning(f"데이터베이스 연결 테스트 실패: {e}")
        return False
