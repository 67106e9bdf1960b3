import logging
import string
from typing import Any, Callable, Dict, List, Tuple

from passlib.context import CryptContext

from tuca.core.settings import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt only looks at the first 72 bytes
BCRYPT_MAX_BYTES = 72
SPECIAL_CHARACTERS = set(string.punctuation)

_CHARACTER_CLASSES: List[Callable[[str], bool]] = [
    str.islower,
    str.isupper,
    str.isdigit,
    lambda c: c in SPECIAL_CHARACTERS,
]


def _classes_used(password: str) -> int:
    return sum(1 for check in _CHARACTER_CLASSES if any(check(c) for c in password))


class PasswordValidator:
    """Checks a candidate password against the configured rules"""

    @staticmethod
    def rules() -> List[Tuple[Callable[[str], bool], str]]:
        min_length = settings.PASSWORD_MIN_LENGTH
        rules = [
            (lambda p: len(p) >= min_length, f"Password must be at least {min_length} characters"),
            (lambda p: len(p.encode("utf-8")) <= BCRYPT_MAX_BYTES, f"Password must be at most {BCRYPT_MAX_BYTES} bytes"),
        ]
        if settings.PASSWORD_REQUIRE_UPPERCASE:
            rules.append((lambda p: any(c.isupper() for c in p), "Password must contain at least one uppercase letter"))
        if settings.PASSWORD_REQUIRE_NUMBER:
            rules.append((lambda p: any(c.isdigit() for c in p), "Password must contain at least one number"))
        return rules

    @staticmethod
    def validate_password(password: str) -> Dict[str, Any]:
        errors = [message for check, message in PasswordValidator.rules() if not check(password)]

        warnings = []
        if len(password) < 12:
            warnings.append("Consider using a longer password for better security")
        if _classes_used(password) < 3:
            warnings.append("Mix letters, numbers and symbols for a stronger password")

        return {
            "is_valid": not errors,
            "errors": errors,
            "warnings": warnings,
            "strength_score": PasswordValidator.strength(password),
        }

    @staticmethod
    def strength(password: str) -> int:
        """0-100: up to 50 for length, 12.5 per character class used"""
        length_score = min(len(password), 20) * 2.5
        return min(int(length_score + _classes_used(password) * 12.5), 100)


def validate_password_strength(password: str) -> Dict[str, Any]:
    return PasswordValidator.validate_password(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a password against its hash"""
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError) as e:
        # Malformed or unknown hash formats count as a failed match
        logger.error(f"Password verification error: {e}")
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)
