"""Relational storage for the podcast catalog using SQLAlchemy.

Works against SQLite for local development and any SQLAlchemy-supported
server database in production.
"""

import structlog
from sqlalchemy import create_engine, event, func, select
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from podcast_catalog.storage.tables import Base, EpisodeRow, PodcastRow, utcnow

logger = structlog.get_logger(__name__)

__all__ = ["Base", "CatalogStore", "EpisodeRow", "PodcastRow"]


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def _build_engine(database_url: str, echo: bool) -> Engine:
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(url, echo=echo, pool_pre_ping=True)

    kwargs: dict = {"echo": echo, "connect_args": {"check_same_thread": False}}
    # An in-memory database lives and dies with its connection, so share one
    if url.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class CatalogStore:
    """SQLAlchemy wrapper holding podcasts and their episodes.

    Rows returned by this class are detached from their session with all
    column attributes and the episode collection already loaded.
    """

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self.database_url = database_url
        self.engine = _build_engine(database_url, echo)
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)
        self.logger = logger.bind(component="store")

        self.logger.info("Database initialized", url=self.engine.url.render_as_string())

    def create_all(self) -> None:
        """Create any missing tables."""
        Base.metadata.create_all(self.engine)

    def drop_all(self) -> None:
        """Drop every catalog table."""
        Base.metadata.drop_all(self.engine)

    def close(self) -> None:
        """Release all pooled connections."""
        self.engine.dispose()
        self.logger.info("Database closed")

    def _session(self) -> Session:
        return self.SessionLocal()

    # --- Podcasts ---

    def create_podcast(self, title: str, category: str, rating: int | None = None) -> PodcastRow:
        """Insert a podcast and return it with its generated id."""
        with self._session() as session, session.begin():
            podcast = PodcastRow(title=title, category=category, rating=rating, episodes=[])
            session.add(podcast)
            session.flush()
        return podcast

    def list_podcasts(self) -> list[PodcastRow]:
        """Return every podcast ordered by id."""
        with self._session() as session:
            return list(session.scalars(select(PodcastRow).order_by(PodcastRow.id)).all())

    def count_podcasts(self) -> int:
        with self._session() as session:
            return session.scalar(select(func.count()).select_from(PodcastRow)) or 0

    def get_podcast(self, podcast_id: int) -> PodcastRow | None:
        with self._session() as session:
            return session.get(PodcastRow, podcast_id)

    def update_podcast(self, podcast_id: int, **changes) -> PodcastRow | None:
        """Apply ``changes`` to a podcast.

        Returns:
            The updated row, or None if no podcast has ``podcast_id``.
        """
        with self._session() as session, session.begin():
            podcast = session.get(PodcastRow, podcast_id)
            if podcast is None:
                return None
            for key, value in changes.items():
                setattr(podcast, key, value)
            podcast.updated_at = utcnow()
        return podcast

    def delete_podcast(self, podcast_id: int) -> bool:
        """Delete a podcast together with all of its episodes.

        Returns:
            True if a podcast was deleted, False if it did not exist.
        """
        with self._session() as session, session.begin():
            podcast = session.get(PodcastRow, podcast_id)
            if podcast is None:
                return False
            session.delete(podcast)
        return True

    # --- Episodes ---

    def create_episode(self, podcast_id: int, title: str, category: str) -> EpisodeRow | None:
        """Insert an episode under an existing podcast.

        Returns:
            The new row, or None if the podcast does not exist.
        """
        with self._session() as session, session.begin():
            podcast = session.get(PodcastRow, podcast_id)
            if podcast is None:
                return None
            episode = EpisodeRow(title=title, category=category)
            podcast.episodes.append(episode)
            session.flush()
        return episode

    def list_episodes(self, podcast_id: int) -> list[EpisodeRow]:
        with self._session() as session:
            stmt = (
                select(EpisodeRow)
                .where(EpisodeRow.podcast_id == podcast_id)
                .order_by(EpisodeRow.id)
            )
            return list(session.scalars(stmt).all())

    def get_episode(self, podcast_id: int, episode_id: int) -> EpisodeRow | None:
        """Find an episode by id, only if it belongs to ``podcast_id``."""
        with self._session() as session:
            stmt = select(EpisodeRow).where(
                EpisodeRow.id == episode_id,
                EpisodeRow.podcast_id == podcast_id,
            )
            return session.scalar(stmt)

    def update_episode(self, podcast_id: int, episode_id: int, **changes) -> EpisodeRow | None:
        with self._session() as session, session.begin():
            episode = session.scalar(
                select(EpisodeRow).where(
                    EpisodeRow.id == episode_id,
                    EpisodeRow.podcast_id == podcast_id,
                )
            )
            if episode is None:
                return None
            for key, value in changes.items():
                setattr(episode, key, value)
            episode.updated_at = utcnow()
        return episode

    def delete_episode(self, podcast_id: int, episode_id: int) -> bool:
        with self._session() as session, session.begin():
            episode = session.scalar(
                select(EpisodeRow).where(
                    EpisodeRow.id == episode_id,
                    EpisodeRow.podcast_id == podcast_id,
                )
            )
            if episode is None:
                return False
            session.delete(episode)
        return True
