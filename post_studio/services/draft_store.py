"""Reads against the record store: draft point lookups and suggested topics."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from post_studio.models.db_models import LinkedInDraftRecord, SuggestedTopic
from post_studio.models.schemas import DraftPayload, SuggestionOut


class DraftStore:
    """Read-only access to the rows the workflow writes."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def fetch_draft(self, flow_id: str) -> DraftPayload | None:
        """Point lookup by flow_id. None when the workflow has not written the row yet."""
        async with self.session_factory() as session:
            r = await session.execute(
                select(LinkedInDraftRecord.text, LinkedInDraftRecord.image_url)
                .where(LinkedInDraftRecord.flow_id == flow_id)
                .limit(1)
            )
            row = r.one_or_none()
        if row is None:
            return None
        return DraftPayload(text=row.text, image_url=row.image_url)

    async def list_suggestions(self) -> list[SuggestionOut]:
        """Unused suggestions first, then alphabetical by topic."""
        async with self.session_factory() as session:
            r = await session.execute(
                select(SuggestedTopic).order_by(SuggestedTopic.used.asc(), SuggestedTopic.topic.asc())
            )
            return [SuggestionOut.model_validate(s) for s in r.scalars().all()]
