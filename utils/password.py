"""password: 비밀번호 해싱 및 검증 유틸리티 모듈."""

import bcrypt


def hash_password(password: str) -> str:
    """비밀번호를 bcrypt로 해싱합니다.

    시드 스크립트에서 테스트 계정을 만들 때 사용합니다.
    """
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호가 해시와 일치하는지 확인합니다.

    해시 형식이 잘못된 경우에도 예외 대신 False를 반환합니다.
    """
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )
    except ValueError:
        return False
