"""
Seed users created once by the bootstrap.

- admin: the designated platform administrator. Its password is a hash of a
  random secret nobody keeps, so it MUST be changed by an operator before
  the account can be used.
- System: the author of platform-generated messages. Its password can never
  be used to log in.

Identity rules are fixed: the administrator is always discriminator 0000
and System is always 0001.
"""
from datetime import datetime
from typing import Any, Optional

from stoatdb.core.security import placeholder_password_hash, unusable_password
from stoatdb.models.base import utcnow
from stoatdb.models.user import User, UserProfile

ADMIN_TEMPLATE: dict[str, Any] = {
    "username": "admin",
    "email": "admin@stoat.chat",
    "discriminator": "0000",
    "badges": 1,  # Developer badge
    "flags": 0,
    "privileged": True,
    "bot": False,
}

SYSTEM_TEMPLATE: dict[str, Any] = {
    "username": "System",
    "email": "system@stoat.chat",
    "discriminator": "0001",
    "badges": 0,
    "flags": 0,
    "privileged": False,
    "bot": True,
}

SYSTEM_PROFILE_CONTENT = "System messages and notifications"


def build_admin_user(now: Optional[datetime] = None) -> User:
    """Build the administrator seed user with a must-change password."""
    now = now or utcnow()
    return User(
        **ADMIN_TEMPLATE,
        password=placeholder_password_hash(),
        profile=UserProfile(),
        relations=[],
        created_at=now,
        last_seen=now,
    )


def build_system_user(now: Optional[datetime] = None) -> User:
    """Build the System seed user, which can never log in."""
    now = now or utcnow()
    return User(
        **SYSTEM_TEMPLATE,
        password=unusable_password(),
        profile=UserProfile(content=SYSTEM_PROFILE_CONTENT),
        relations=[],
        created_at=now,
        last_seen=now,
    )


def provision_seed_users(now: Optional[datetime] = None) -> list[User]:
    """Both seed users stamped with the same instant, administrator first."""
    now = now or utcnow()
    return [build_admin_user(now), build_system_user(now)]
