"""SQLAlchemy ORM tables for podcasts and episodes."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """created_at / updated_at columns shared by every table."""

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class PodcastRow(TimestampMixin, Base):
    __tablename__ = "podcasts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)

    episodes: Mapped[list["EpisodeRow"]] = relationship(
        back_populates="podcast",
        cascade="all, delete-orphan",
        order_by="EpisodeRow.id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<PodcastRow(id={self.id}, title={self.title!r})>"


class EpisodeRow(TimestampMixin, Base):
    __tablename__ = "episodes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    podcast_id: Mapped[int] = mapped_column(
        ForeignKey("podcasts.id", ondelete="CASCADE"), nullable=False, index=True
    )

    podcast: Mapped[PodcastRow] = relationship(back_populates="episodes")

    def __repr__(self) -> str:
        return f"<EpisodeRow(id={self.id}, podcast_id={self.podcast_id}, title={self.title!r})>"
