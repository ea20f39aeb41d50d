"""비밀번호 해싱, 검증 및 길이 규칙 유틸리티 모듈.

Password hashing, verification and length-rule utility module.
Uses bcrypt directly; plain passwords are never persisted.
"""

import bcrypt

# 허용 비밀번호 길이 (포함) — Accepted password length, inclusive
PASSWORD_MIN_LENGTH: int = 5
PASSWORD_MAX_LENGTH: int = 50


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password using bcrypt with a random salt.

    Args:
        password: 평문 비밀번호 (Plain text password to hash)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다.

    Returns:
        bool: 일치하면 True (True if password matches hash)
    """
    return bcrypt.checkpw(
        plain_password.encode("utf-8"), hashed_password.encode("utf-8")
    )


def is_valid_password_length(password: str | None) -> bool:
    """비밀번호가 비어있지 않고 5~50자인지 확인합니다.

    Check the password is non-empty and between 5 and 50 characters.
    """
    if not password:
        return False
    return PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH
