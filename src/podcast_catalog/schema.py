"""GraphQL schema for the podcast catalog using strawberry.

Every operation returns an output object carrying ``ok`` and ``error``.
Catalog errors are reported through those fields; the HTTP response is
always a success. Service calls block on the database, so resolvers run
them in the threadpool rather than on the event loop.
"""

from datetime import datetime
from typing import Annotated

import strawberry
from fastapi.concurrency import run_in_threadpool
from strawberry.types import Info

from podcast_catalog.errors import CatalogError
from podcast_catalog.models import Episode, EpisodeUpdate, Podcast, PodcastUpdate
from podcast_catalog.service import CatalogService


def _service(info: Info) -> CatalogService:
    return info.context["service"]


# --- Object types ---


@strawberry.type(name="Episode")
class EpisodeType:
    id: int
    title: str
    category: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, episode: Episode) -> "EpisodeType":
        return cls(
            id=episode.id,
            title=episode.title,
            category=episode.category,
            created_at=episode.created_at,
            updated_at=episode.updated_at,
        )


@strawberry.type(name="Podcast")
class PodcastType:
    id: int
    title: str
    category: str
    rating: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    episodes: list[EpisodeType] = strawberry.field(default_factory=list)

    @classmethod
    def from_record(cls, podcast: Podcast) -> "PodcastType":
        return cls(
            id=podcast.id,
            title=podcast.title,
            category=podcast.category,
            rating=podcast.rating,
            created_at=podcast.created_at,
            updated_at=podcast.updated_at,
            episodes=[EpisodeType.from_record(ep) for ep in podcast.episodes],
        )


# --- Inputs ---


@strawberry.input
class CreatePodcastInput:
    title: str
    category: str
    rating: int | None = None


@strawberry.input
class CreateEpisodeInput:
    title: str
    category: str
    podcast_id: int


@strawberry.input
class PodcastSearchInput:
    id: int


@strawberry.input
class EpisodesSearchInput:
    podcast_id: int
    episode_id: int


@strawberry.input
class UpdatePodcastPayload:
    title: str | None = None
    category: str | None = None
    rating: int | None = None


@strawberry.input
class UpdatePodcastInput:
    id: int
    payload: UpdatePodcastPayload


@strawberry.input
class UpdateEpisodeInput:
    podcast_id: int
    episode_id: int
    title: str | None = None
    category: str | None = None


# --- Outputs ---


@strawberry.type
class CoreOutput:
    ok: bool
    error: str | None = None


@strawberry.type
class CreatePodcastOutput(CoreOutput):
    id: int | None = None


@strawberry.type
class CreateEpisodeOutput(CoreOutput):
    id: int | None = None


@strawberry.type
class GetAllPodcastsOutput(CoreOutput):
    podcasts: list[PodcastType] | None = None


@strawberry.type
class PodcastOutput(CoreOutput):
    podcast: PodcastType | None = None


@strawberry.type
class EpisodesOutput(CoreOutput):
    episodes: list[EpisodeType] | None = None


@strawberry.type
class EpisodeOutput(CoreOutput):
    episode: EpisodeType | None = None


# --- Operations ---


@strawberry.type
class Query:
    @strawberry.field
    async def get_all_podcasts(self, info: Info) -> GetAllPodcastsOutput:
        podcasts = await run_in_threadpool(_service(info).get_all_podcasts)
        return GetAllPodcastsOutput(
            ok=True, podcasts=[PodcastType.from_record(p) for p in podcasts]
        )

    @strawberry.field
    async def get_podcast(
        self,
        info: Info,
        data: Annotated[PodcastSearchInput, strawberry.argument(name="input")],
    ) -> PodcastOutput:
        try:
            podcast = await run_in_threadpool(_service(info).get_podcast, data.id)
        except CatalogError as exc:
            return PodcastOutput(ok=False, error=str(exc))
        return PodcastOutput(ok=True, podcast=PodcastType.from_record(podcast))

    @strawberry.field
    async def get_episodes(
        self,
        info: Info,
        data: Annotated[PodcastSearchInput, strawberry.argument(name="input")],
    ) -> EpisodesOutput:
        try:
            episodes = await run_in_threadpool(_service(info).get_episodes, data.id)
        except CatalogError as exc:
            return EpisodesOutput(ok=False, error=str(exc))
        return EpisodesOutput(ok=True, episodes=[EpisodeType.from_record(e) for e in episodes])

    @strawberry.field
    async def get_episode(
        self,
        info: Info,
        data: Annotated[EpisodesSearchInput, strawberry.argument(name="input")],
    ) -> EpisodeOutput:
        try:
            episode = await run_in_threadpool(
                _service(info).get_episode, data.podcast_id, data.episode_id
            )
        except CatalogError as exc:
            return EpisodeOutput(ok=False, error=str(exc))
        return EpisodeOutput(ok=True, episode=EpisodeType.from_record(episode))


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_podcast(
        self,
        info: Info,
        data: Annotated[CreatePodcastInput, strawberry.argument(name="input")],
    ) -> CreatePodcastOutput:
        try:
            podcast = await run_in_threadpool(
                _service(info).create_podcast,
                title=data.title, category=data.category, rating=data.rating
            )
        except CatalogError as exc:
            return CreatePodcastOutput(ok=False, error=str(exc))
        return CreatePodcastOutput(ok=True, id=podcast.id)

    @strawberry.mutation
    async def create_episode(
        self,
        info: Info,
        data: Annotated[CreateEpisodeInput, strawberry.argument(name="input")],
    ) -> CreateEpisodeOutput:
        try:
            episode = await run_in_threadpool(
                _service(info).create_episode,
                podcast_id=data.podcast_id, title=data.title, category=data.category
            )
        except CatalogError as exc:
            return CreateEpisodeOutput(ok=False, error=str(exc))
        return CreateEpisodeOutput(ok=True, id=episode.id)

    @strawberry.mutation
    async def update_podcast(
        self,
        info: Info,
        data: Annotated[UpdatePodcastInput, strawberry.argument(name="input")],
    ) -> CoreOutput:
        payload = PodcastUpdate(
            title=data.payload.title,
            category=data.payload.category,
            rating=data.payload.rating,
        )
        try:
            await run_in_threadpool(_service(info).update_podcast, data.id, payload)
        except CatalogError as exc:
            return CoreOutput(ok=False, error=str(exc))
        return CoreOutput(ok=True)

    @strawberry.mutation
    async def update_episode(
        self,
        info: Info,
        data: Annotated[UpdateEpisodeInput, strawberry.argument(name="input")],
    ) -> CoreOutput:
        payload = EpisodeUpdate(title=data.title, category=data.category)
        try:
            await run_in_threadpool(
                _service(info).update_episode, data.podcast_id, data.episode_id, payload
            )
        except CatalogError as exc:
            return CoreOutput(ok=False, error=str(exc))
        return CoreOutput(ok=True)

    @strawberry.mutation
    async def delete_episode(
        self,
        info: Info,
        data: Annotated[EpisodesSearchInput, strawberry.argument(name="input")],
    ) -> CoreOutput:
        try:
            await run_in_threadpool(
                _service(info).delete_episode, data.podcast_id, data.episode_id
            )
        except CatalogError as exc:
            return CoreOutput(ok=False, error=str(exc))
        return CoreOutput(ok=True)

    @strawberry.mutation
    async def delete_podcast(
        self,
        info: Info,
        data: Annotated[PodcastSearchInput, strawberry.argument(name="input")],
    ) -> CoreOutput:
        try:
            await run_in_threadpool(_service(info).delete_podcast, data.id)
        except CatalogError as exc:
            return CoreOutput(ok=False, error=str(exc))
        return CoreOutput(ok=True)


schema = strawberry.Schema(query=Query, mutation=Mutation)
