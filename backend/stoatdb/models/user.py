"""
User model for the users collection.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from stoatdb.database.collections import Collections
from stoatdb.models.base import StoatRecord, utcnow


class UserProfile(BaseModel):
    """Free-form profile shown on a user's card."""

    model_config = ConfigDict(extra="ignore")

    content: Optional[str] = None
    background: Optional[str] = None


class User(StoatRecord):
    """
    User document model for MongoDB stoatchat.users collection.
    """
    collection_name = Collections.USERS

    username: str = Field(..., min_length=1, max_length=32, description="Unique username")
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(
        ...,
        min_length=1,
        description="Bcrypt hash, or an unusable sentinel for accounts that never log in",
    )
    discriminator: str = Field(
        ...,
        pattern=r"^\d{4}$",
        description="Four digit suffix telling apart users with similar names",
    )
    avatar: Optional[str] = Field(None, description="Attachment id of the avatar")
    status: Optional[str] = Field(None, description="Custom status text")
    profile: UserProfile = Field(default_factory=UserProfile)
    relations: list[dict[str, Any]] = Field(default_factory=list)
    badges: int = Field(default=0, ge=0, description="Badge bitfield")
    flags: int = Field(default=0, ge=0, description="Account flag bitfield")
    privileged: bool = Field(default=False, description="Platform administrator")
    bot: bool = Field(default=False, description="Non-human account")
    created_at: datetime = Field(default_factory=utcnow)
    last_seen: datetime = Field(default_factory=utcnow)
