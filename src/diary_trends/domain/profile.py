"""Domain models for user profile facts the analytics need."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserProfile:
    """Profile values supplied by the profile store."""

    user_id: UUID
    calorie_target: float | None = None
    timezone: str | None = None
    premium: bool = False
