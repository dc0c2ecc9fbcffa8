"""Supabase repository for timeline entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from diary_trends.services.trends import TimelineRepository

_COLUMNS = (
    "id, entry_type, timestamp, name, calories, protein, carbs, fat, "
    "steps, calories_burned, active_energy, distance, floors_ascended, weight, "
    "fat_percent, symptoms, severity, notes"
)


@dataclass
class SupabaseTimelineRepository(TimelineRepository):
    """Supabase implementation for reading timeline entries."""

    client: Client

    def list_entries(
        self, user_id: UUID, since: datetime | None
    ) -> list[dict[str, object]]:
        """Return raw timeline rows for a user, oldest first."""
        query = (
            self.client.table("timeline_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
        )
        if since is not None:
            query = query.gte("timestamp", since.isoformat())
        response = query.order("timestamp", desc=False).execute()
        return [dict(row) for row in response.data or []]
