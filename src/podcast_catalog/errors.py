"""Custom exceptions for the podcast catalog.

The message of every exception is the human-readable text returned to
GraphQL clients in the ``error`` field.
"""

RATING_MIN = 1
RATING_MAX = 5


class CatalogError(Exception):
    """Base exception for all catalog errors."""

    pass


class NotFoundError(CatalogError):
    """A requested resource does not exist."""

    pass


class PodcastNotFoundError(NotFoundError):
    """No podcast with the given id."""

    def __init__(self, podcast_id: int) -> None:
        self.podcast_id = podcast_id
        super().__init__(f"Podcast with id {podcast_id} not found")


class EpisodeNotFoundError(NotFoundError):
    """No episode with the given id under the given podcast."""

    def __init__(self, podcast_id: int, episode_id: int) -> None:
        self.podcast_id = podcast_id
        self.episode_id = episode_id
        super().__init__(
            f"Episode with id {episode_id} not found in podcast with id {podcast_id}"
        )


class ValidationError(CatalogError):
    """Input failed validation."""

    pass


class InvalidRatingError(ValidationError):
    """Rating outside the accepted range."""

    def __init__(self, rating: int) -> None:
        self.rating = rating
        super().__init__(f"Rating must be between {RATING_MIN} and {RATING_MAX}.")
