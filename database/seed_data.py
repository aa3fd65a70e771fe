"""seed_data.py: 개발용 더미 데이터 생성 스크립트.

사용법:
    source .venv/bin/activate
    mysql -u root -p community < database/schema.sql
    python database/seed_data.py

생성되는 데이터:
    - 250 users (user1@example.com ~ user250@example.com / Test1234!)
    - 50 categories
"""

import asyncio
import random

# 프로젝트 루트를 PYTHONPATH에 추가
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from faker import Faker

from database.connection import init_db, close_db, transactional
from schemas.category_schemas import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH
from utils.password import hash_password

fake = Faker("ko_KR")
Faker.seed(42)  # 재현 가능한 데이터
random.seed(42)

NUM_USERS = 250
NUM_CATEGORIES = 50
BATCH_SIZE = 100

SEED_PASSWORD = "Test1234!"


async def clear_existing_data() -> None:
    """기존 데이터 삭제 (개발 환경 전용)."""
    print("Clearing existing data...")
    async with transactional() as cur:
        await cur.execute("SET FOREIGN_KEY_CHECKS = 0")
        await cur.execute("TRUNCATE TABLE category")
        await cur.execute("TRUNCATE TABLE user")
        await cur.execute("SET FOREIGN_KEY_CHECKS = 1")
    print("Existing data cleared.")


async def seed_users() -> None:
    """사용자 데이터 생성."""
    print(f"Seeding {NUM_USERS} users...")
    hashed = hash_password(SEED_PASSWORD)

    rows = [
        (f"user{i}@example.com", f"user_{i:05d}", hashed)
        for i in range(1, NUM_USERS + 1)
    ]
    for start in range(0, len(rows), BATCH_SIZE):
        async with transactional() as cur:
            await cur.executemany(
                "INSERT INTO user (email, nickname, password) VALUES (%s, %s, %s)",
                rows[start:start + BATCH_SIZE],
            )
    print(f"✓ {NUM_USERS} users created")


async def seed_categories() -> None:
    """카테고리 데이터 생성."""
    print(f"Seeding {NUM_CATEGORIES} categories...")

    names = set()
    while len(names) < NUM_CATEGORIES:
        names.add(fake.word()[:NAME_MAX_LENGTH])

    rows = [
        (name, fake.sentence(nb_words=12)[:DESCRIPTION_MAX_LENGTH])
        for name in sorted(names)
    ]
    async with transactional() as cur:
        await cur.executemany(
            "INSERT INTO category (name, description) VALUES (%s, %s)", rows
        )
    print(f"✓ {NUM_CATEGORIES} categories created")


async def main() -> None:
    await init_db()
    try:
        await clear_existing_data()
        await seed_users()
        await seed_categories()
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
