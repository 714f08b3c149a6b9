# dialogue_api/domains/dialogues/service.py
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional

from dialogue_api.domains.dialogues.exceptions import (
    DialogueAlreadyPublishedError,
    DialogueNotFoundError,
    DialogueNotPublishedError,
)
from dialogue_api.domains.dialogues.models import (
    DialogueCreate,
    DialogueResponse,
    DialogueUpdate,
    Pagination,
    PlayStatsResponse,
    PublishedDialoguesResponse,
)
from dialogue_api.shared.exceptions import InvalidDataError

if TYPE_CHECKING:
    from prisma import Prisma

logger = logging.getLogger(__name__)


class DialogueService:
    def __init__(self, db: "Prisma"):
        self.db = db

    async def find_dialogue_record(self, dialogue_id: str) -> Optional[Any]:
        """Fetch the raw dialogue row, or None. Used where the owner is needed."""
        return await self.db.dialogue.find_unique(where={"id": dialogue_id})

    async def get_dialogue_record(self, dialogue_id: str) -> Any:
        """
        Raises:
            DialogueNotFoundError: If no dialogue has this id
        """
        dialogue = await self.find_dialogue_record(dialogue_id)
        if not dialogue:
            raise DialogueNotFoundError()
        return dialogue

    async def get_dialogue(self, dialogue_id: str) -> DialogueResponse:
        return DialogueResponse.from_prisma(await self.get_dialogue_record(dialogue_id))

    async def create_dialogue(
        self, user_id: str, dialogue_data: DialogueCreate
    ) -> DialogueResponse:
        dialogue = await self.db.dialogue.create(
            data={
                "userId": user_id,
                "title": dialogue_data.title,
                "description": dialogue_data.description,
                "genre": dialogue_data.genre,
                "hashtags": dialogue_data.hashtags,
            }
        )
        logger.info(f"Dialogue {dialogue.id} created by {user_id}")
        return DialogueResponse.from_prisma(dialogue)

    async def update_dialogue(
        self, dialogue_id: str, updates: DialogueUpdate
    ) -> DialogueResponse:
        """
        Apply a partial update.

        Raises:
            InvalidDataError: If the update carries no fields
        """
        data = updates.to_prisma_data()
        if not data:
            raise InvalidDataError("At least one field must be provided for update")

        dialogue = await self.db.dialogue.update(where={"id": dialogue_id}, data=data)
        if not dialogue:
            raise DialogueNotFoundError()
        return DialogueResponse.from_prisma(dialogue)

    async def delete_dialogue(self, dialogue_id: str) -> None:
        deleted = await self.db.dialogue.delete(where={"id": dialogue_id})
        if not deleted:
            raise DialogueNotFoundError()
        logger.info(f"Dialogue {dialogue_id} deleted")

    async def publish_dialogue(self, dialogue_id: str) -> DialogueResponse:
        """
        Make a dialogue publicly visible.

        Raises:
            DialogueNotFoundError: If no dialogue has this id
            DialogueAlreadyPublishedError: If it is already public
        """
        existing = await self.get_dialogue_record(dialogue_id)
        if existing.isPublished:
            raise DialogueAlreadyPublishedError()

        dialogue = await self.db.dialogue.update(
            where={"id": dialogue_id},
            data={"isPublished": True, "publishedAt": datetime.now(timezone.utc)},
        )
        if not dialogue:
            raise DialogueNotFoundError()
        logger.info(f"Dialogue {dialogue_id} published")
        return DialogueResponse.from_prisma(dialogue)

    async def unpublish_dialogue(self, dialogue_id: str) -> DialogueResponse:
        """
        Withdraw a dialogue from public view.

        Raises:
            DialogueNotFoundError: If no dialogue has this id
            DialogueNotPublishedError: If it is not public
        """
        existing = await self.get_dialogue_record(dialogue_id)
        if not existing.isPublished:
            raise DialogueNotPublishedError()

        dialogue = await self.db.dialogue.update(
            where={"id": dialogue_id},
            data={"isPublished": False, "publishedAt": None},
        )
        if not dialogue:
            raise DialogueNotFoundError()
        logger.info(f"Dialogue {dialogue_id} unpublished")
        return DialogueResponse.from_prisma(dialogue)

    async def record_play(self, dialogue_id: str) -> PlayStatsResponse:
        """
        Count one play. The increment happens in the database so concurrent
        plays are not lost.

        Raises:
            DialogueNotFoundError: If no dialogue has this id
        """
        dialogue = await self.db.dialogue.update(
            where={"id": dialogue_id},
            data={
                "plays": {"increment": 1},
                "lastPlayedAt": datetime.now(timezone.utc),
            },
        )
        if not dialogue:
            raise DialogueNotFoundError()
        return PlayStatsResponse(
            dialogueId=dialogue.id,
            plays=dialogue.plays,
            lastPlayedAt=dialogue.lastPlayedAt,
        )

    async def list_published(
        self, user_id: Optional[str] = None, page: int = 1, limit: int = 10
    ) -> PublishedDialoguesResponse:
        """
        Published dialogues, newest first, optionally for a single author.

        One extra row is fetched to tell whether another page exists.
        """
        where: Dict[str, Any] = {"isPublished": True}
        if user_id:
            where["userId"] = user_id

        rows = await self.db.dialogue.find_many(
            where=where,
            order={"publishedAt": "desc"},
            skip=(page - 1) * limit,
            take=limit + 1,
        )
        return PublishedDialoguesResponse(
            dialogues=[DialogueResponse.from_prisma(d) for d in rows[:limit]],
            pagination=Pagination(page=page, limit=limit, hasMore=len(rows) > limit),
        )
