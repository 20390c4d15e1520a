"""
Password hashing helpers for stored user credentials.
"""
import secrets

from passlib.context import CryptContext

# Password hashing context using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Prefix for password values that can never match any login attempt
UNUSABLE_PASSWORD_PREFIX = "!"


def hash_password(plain_password: str) -> str:
    """
    Hash a plain password using bcrypt.
    
    Args:
        plain_password: The plain text password to hash
        
    Returns:
        Hashed password string
    """
    return pwd_context.hash(plain_password)


def is_password_usable(hashed_password: str | None) -> bool:
    """Return True if the stored value is a hash some login path could check."""
    if not hashed_password or hashed_password.startswith(UNUSABLE_PASSWORD_PREFIX):
        return False
    return pwd_context.identify(hashed_password) is not None


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """
    Verify a plain password against a hashed password.
    
    Unusable sentinels, values that are not recognised hashes and
    malformed hashes never verify.
    
    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against
        
    Returns:
        True if password matches, False otherwise
    """
    if not is_password_usable(hashed_password):
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Looks like a known scheme but is malformed
        return False


def placeholder_password_hash() -> str:
    """
    Bcrypt hash of a random secret that is thrown away immediately.

    The result is a well-formed credential, but nobody knows the password
    behind it. An operator MUST set a new password before the account can
    be used.
    """
    return hash_password(secrets.token_urlsafe(32))


def unusable_password() -> str:
    """A password value that no hash scheme recognises, so no login can match it."""
    return UNUSABLE_PASSWORD_PREFIX + secrets.token_hex(20)
