"""Resource operations for podcasts and episodes.

Validates input, enforces podcast/episode ownership and converts stored
rows into pydantic records. Failures are raised as ``CatalogError``
subclasses whose messages are safe to show to API clients.
"""

import structlog

from podcast_catalog.errors import (
    RATING_MAX,
    RATING_MIN,
    EpisodeNotFoundError,
    InvalidRatingError,
    PodcastNotFoundError,
)
from podcast_catalog.models import Episode, EpisodeUpdate, Podcast, PodcastUpdate
from podcast_catalog.storage import CatalogStore

logger = structlog.get_logger(__name__)


def validate_rating(rating: int | None) -> None:
    """Raise InvalidRatingError unless rating is None or within range."""
    if rating is not None and not RATING_MIN <= rating <= RATING_MAX:
        raise InvalidRatingError(rating)


class CatalogService:
    """Create, read, update and delete podcasts and their episodes."""

    def __init__(self, store: CatalogStore) -> None:
        self.store = store
        self.logger = logger.bind(component="catalog_service")

    # --- Podcasts ---

    def create_podcast(self, title: str, category: str, rating: int | None = None) -> Podcast:
        """Create a podcast.

        Args:
            title: Podcast title.
            category: Podcast category.
            rating: Optional rating between 1 and 5.

        Returns:
            Podcast: The stored podcast with its generated id.

        Raises:
            InvalidRatingError: If rating is outside the accepted range.
        """
        try:
            validate_rating(rating)
        except InvalidRatingError:
            self.logger.warning("Rejected podcast with invalid rating", rating=rating)
            raise

        row = self.store.create_podcast(title=title, category=category, rating=rating)
        self.logger.info("Created podcast", podcast_id=row.id, title=title)
        return Podcast.model_validate(row)

    def get_all_podcasts(self) -> list[Podcast]:
        """Return every podcast, empty list when there are none."""
        return [Podcast.model_validate(row) for row in self.store.list_podcasts()]

    def get_podcast(self, podcast_id: int) -> Podcast:
        """Return one podcast.

        Raises:
            PodcastNotFoundError: If no podcast has the id.
        """
        row = self.store.get_podcast(podcast_id)
        if row is None:
            self.logger.info("Podcast not found", podcast_id=podcast_id)
            raise PodcastNotFoundError(podcast_id)
        return Podcast.model_validate(row)

    def update_podcast(self, podcast_id: int, payload: PodcastUpdate) -> Podcast:
        """Apply a partial update to a podcast.

        Existence is checked before the rating, and an invalid rating leaves
        the stored podcast untouched.

        Raises:
            PodcastNotFoundError: If no podcast has the id.
            InvalidRatingError: If payload.rating is outside the accepted range.
        """
        self.get_podcast(podcast_id)
        try:
            validate_rating(payload.rating)
        except InvalidRatingError:
            self.logger.warning(
                "Rejected podcast update with invalid rating",
                podcast_id=podcast_id,
                rating=payload.rating,
            )
            raise

        changes = payload.changes()
        row = self.store.update_podcast(podcast_id, **changes)
        if row is None:
            # Deleted between the lookup and the write
            raise PodcastNotFoundError(podcast_id)
        self.logger.info("Updated podcast", podcast_id=podcast_id, fields=sorted(changes))
        return Podcast.model_validate(row)

    def delete_podcast(self, podcast_id: int) -> None:
        """Delete a podcast and all of its episodes.

        Raises:
            PodcastNotFoundError: If no podcast has the id.
        """
        if not self.store.delete_podcast(podcast_id):
            self.logger.info("Podcast not found", podcast_id=podcast_id)
            raise PodcastNotFoundError(podcast_id)
        self.logger.info("Deleted podcast", podcast_id=podcast_id)

    # --- Episodes ---

    def create_episode(self, podcast_id: int, title: str, category: str) -> Episode:
        """Create an episode under an existing podcast.

        Raises:
            PodcastNotFoundError: If the owning podcast does not exist.
        """
        row = self.store.create_episode(podcast_id=podcast_id, title=title, category=category)
        if row is None:
            self.logger.info("Podcast not found", podcast_id=podcast_id)
            raise PodcastNotFoundError(podcast_id)
        self.logger.info("Created episode", podcast_id=podcast_id, episode_id=row.id, title=title)
        return Episode.model_validate(row)

    def get_episodes(self, podcast_id: int) -> list[Episode]:
        """Return all episodes of a podcast.

        Raises:
            PodcastNotFoundError: If no podcast has the id.
        """
        self.get_podcast(podcast_id)
        return [Episode.model_validate(row) for row in self.store.list_episodes(podcast_id)]

    def get_episode(self, podcast_id: int, episode_id: int) -> Episode:
        """Return one episode of a podcast.

        An episode that exists under a different podcast is reported as
        not found.

        Raises:
            PodcastNotFoundError: If no podcast has podcast_id.
            EpisodeNotFoundError: If the podcast has no episode with episode_id.
        """
        self.get_podcast(podcast_id)
        row = self.store.get_episode(podcast_id, episode_id)
        if row is None:
            self.logger.info("Episode not found", podcast_id=podcast_id, episode_id=episode_id)
            raise EpisodeNotFoundError(podcast_id, episode_id)
        return Episode.model_validate(row)

    def update_episode(self, podcast_id: int, episode_id: int, payload: EpisodeUpdate) -> Episode:
        """Apply a partial update to an episode of a podcast.

        Raises:
            PodcastNotFoundError: If no podcast has podcast_id.
            EpisodeNotFoundError: If the podcast has no episode with episode_id.
        """
        self.get_podcast(podcast_id)
        changes = payload.changes()
        row = self.store.update_episode(podcast_id, episode_id, **changes)
        if row is None:
            self.logger.info("Episode not found", podcast_id=podcast_id, episode_id=episode_id)
            raise EpisodeNotFoundError(podcast_id, episode_id)
        self.logger.info(
            "Updated episode", podcast_id=podcast_id, episode_id=episode_id, fields=sorted(changes)
        )
        return Episode.model_validate(row)

    def delete_episode(self, podcast_id: int, episode_id: int) -> None:
        """Delete one episode. The podcast and its other episodes are untouched.

        Raises:
            PodcastNotFoundError: If no podcast has podcast_id.
            EpisodeNotFoundError: If the podcast has no episode with episode_id.
        """
        self.get_podcast(podcast_id)
        if not self.store.delete_episode(podcast_id, episode_id):
            self.logger.info("Episode not found", podcast_id=podcast_id, episode_id=episode_id)
            raise EpisodeNotFoundError(podcast_id, episode_id)
        self.logger.info("Deleted episode", podcast_id=podcast_id, episode_id=episode_id)
