"""Pydantic records for podcasts and episodes.

Rows loaded from the database are converted to these models before they
leave the service layer, so callers never hold live ORM state.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Episode(BaseModel):
    """A single episode belonging to one podcast."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Episode identifier")
    podcast_id: int = Field(description="Owning podcast identifier")
    title: str = Field(description="Episode title")
    category: str = Field(description="Episode category")
    created_at: datetime | None = Field(default=None, description="Creation time (UTC)")
    updated_at: datetime | None = Field(default=None, description="Last update time (UTC)")


class Podcast(BaseModel):
    """A catalog entry owning zero or more episodes."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Podcast identifier")
    title: str = Field(description="Podcast title")
    category: str = Field(description="Podcast category")
    rating: int | None = Field(default=None, description="Rating between 1 and 5")
    created_at: datetime | None = Field(default=None, description="Creation time (UTC)")
    updated_at: datetime | None = Field(default=None, description="Last update time (UTC)")
    episodes: list[Episode] = Field(default_factory=list, description="Owned episodes")


class PodcastUpdate(BaseModel):
    """Partial update for a podcast. Unset fields are left untouched."""

    title: str | None = None
    category: str | None = None
    rating: int | None = None

    def changes(self) -> dict:
        """Return only the fields that were supplied."""
        return self.model_dump(exclude_none=True)


class EpisodeUpdate(BaseModel):
    """Partial update for an episode. Unset fields are left untouched."""

    title: str | None = None
    category: str | None = None

    def changes(self) -> dict:
        """Return only the fields that were supplied."""
        return self.model_dump(exclude_none=True)
