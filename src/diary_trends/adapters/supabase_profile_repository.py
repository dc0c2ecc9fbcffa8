"""Supabase repository for user profile values."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diary_trends.domain.profile import UserProfile
from diary_trends.services.trends import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile lookups."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile for a user."""
        response = (
            self.client.table("user_profiles")
            .select("tdee, timezone, premium")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        tdee = row.get("tdee")
        return UserProfile(
            user_id=user_id,
            calorie_target=float(tdee) if isinstance(tdee, int | float) else None,
            timezone=row.get("timezone"),
            premium=bool(row.get("premium", False)),
        )
