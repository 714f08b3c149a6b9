# dialogue_api/domains/dialogues/models.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


def normalize_hashtags(tags: List[str]) -> List[str]:
    """Strip leading '#' and drop tags that are empty once stripped."""
    return [tag.strip().lstrip("#") for tag in tags if tag.strip("# ")]


class DialogueCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    genre: str = "OTHER"
    hashtags: List[str] = []

    @field_validator("hashtags")
    @classmethod
    def strip_hash_prefix(cls, v: List[str]) -> List[str]:
        return normalize_hashtags(v)


class DialogueUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    genre: Optional[str] = None
    hashtags: Optional[List[str]] = None

    @field_validator("title", "genre", "hashtags", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        # Omit a field to leave it unchanged; only description may be cleared
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("hashtags")
    @classmethod
    def strip_hash_prefix(cls, v: List[str]) -> List[str]:
        return normalize_hashtags(v)

    def to_prisma_data(self) -> Dict[str, Any]:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class DialogueResponse(BaseModel):
    """Response model for dialogue data"""

    id: str
    userId: str
    title: str
    description: Optional[str] = None
    genre: str
    hashtags: List[str] = []
    isPublished: bool = False
    publishedAt: Optional[datetime] = None
    plays: int = 0
    lastPlayedAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_prisma(cls, dialogue: Any) -> "DialogueResponse":
        return cls(
            id=dialogue.id,
            userId=dialogue.userId,
            title=dialogue.title,
            description=dialogue.description,
            genre=dialogue.genre,
            hashtags=list(dialogue.hashtags or []),
            isPublished=dialogue.isPublished,
            publishedAt=dialogue.publishedAt,
            plays=dialogue.plays,
            lastPlayedAt=dialogue.lastPlayedAt,
            createdAt=dialogue.createdAt,
            updatedAt=dialogue.updatedAt,
        )


class PlayStatsResponse(BaseModel):
    dialogueId: str
    plays: int
    lastPlayedAt: Optional[datetime] = None


class Pagination(BaseModel):
    page: int
    limit: int
    hasMore: bool


class PublishedDialoguesResponse(BaseModel):
    dialogues: List[DialogueResponse]
    pagination: Pagination
