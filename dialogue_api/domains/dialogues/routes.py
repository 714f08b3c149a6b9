# dialogue_api/domains/dialogues/routes.py
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from dialogue_api.core.database import get_db
from dialogue_api.domains.auth.dependencies import get_auth_id
from dialogue_api.domains.dialogues.exceptions import DialogueNotFoundError
from dialogue_api.domains.dialogues.models import (
    DialogueCreate,
    DialogueResponse,
    DialogueUpdate,
    PlayStatsResponse,
    PublishedDialoguesResponse,
)
from dialogue_api.domains.dialogues.service import DialogueService
from dialogue_api.shared.permissions import (
    AccessGate,
    Action,
    Resource,
    enforce_policy,
    get_access_gate,
    policy_for,
    require_policy,
)

router = APIRouter(prefix="/dialogues", tags=["Dialogues"])


def get_dialogue_service(db=Depends(get_db)) -> DialogueService:
    return DialogueService(db)


async def _authorize_owned(
    service: DialogueService,
    gate: AccessGate,
    auth_id: str,
    dialogue_id: str,
    action: Action,
) -> Any:
    """
    Run the gate for an owner-aware action and return the dialogue row.

    The gate runs before existence is reported, so callers without rights
    get 403 whether or not the dialogue exists.
    """
    dialogue = await service.find_dialogue_record(dialogue_id)
    owner_id = (
        policy_for(Resource.DIALOGUE, action).owner_from(vars(dialogue))
        if dialogue
        else None
    )
    await enforce_policy(gate, auth_id, Resource.DIALOGUE, action, owner_id)
    if not dialogue:
        raise DialogueNotFoundError()
    return dialogue


@router.post(
    "",
    response_model=DialogueResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createDialogue",
)
async def create_dialogue(
    dialogue_data: DialogueCreate,
    user_id: str = Depends(require_policy(Resource.DIALOGUE, Action.CREATE)),
    service: DialogueService = Depends(get_dialogue_service),
) -> DialogueResponse:
    """
    Create a dialogue owned by the caller.

    Requires CREATE_DIALOGUE permission.
    """
    return await service.create_dialogue(user_id, dialogue_data)


@router.get(
    "/published",
    response_model=PublishedDialoguesResponse,
    operation_id="listPublishedDialogues",
)
async def list_published_dialogues(
    user_id: Optional[str] = Query(None, alias="userId", min_length=1),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    auth_id: str = Depends(require_policy(Resource.DIALOGUE, Action.VIEW)),
    service: DialogueService = Depends(get_dialogue_service),
) -> PublishedDialoguesResponse:
    """List published dialogues, newest first. Filter by author with ``userId``."""
    return await service.list_published(user_id, page, limit)


@router.get(
    "/{dialogue_id}",
    response_model=DialogueResponse,
    operation_id="getDialogue",
)
async def get_dialogue(
    dialogue_id: str,
    user_id: str = Depends(require_policy(Resource.DIALOGUE, Action.VIEW)),
    service: DialogueService = Depends(get_dialogue_service),
) -> DialogueResponse:
    """Get a dialogue. Any authenticated user may read."""
    return await service.get_dialogue(dialogue_id)


@router.put(
    "/{dialogue_id}",
    response_model=DialogueResponse,
    operation_id="updateDialogue",
)
async def update_dialogue(
    dialogue_id: str,
    updates: DialogueUpdate,
    auth_id: str = Depends(get_auth_id),
    gate: AccessGate = Depends(get_access_gate),
    service: DialogueService = Depends(get_dialogue_service),
) -> DialogueResponse:
    """
    Update a dialogue.

    The owner may always edit; anyone else needs EDIT_DIALOGUE.
    """
    await _authorize_owned(service, gate, auth_id, dialogue_id, Action.EDIT)
    return await service.update_dialogue(dialogue_id, updates)


@router.delete(
    "/{dialogue_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    operation_id="deleteDialogue",
)
async def delete_dialogue(
    dialogue_id: str,
    auth_id: str = Depends(get_auth_id),
    gate: AccessGate = Depends(get_access_gate),
    service: DialogueService = Depends(get_dialogue_service),
) -> Response:
    """
    Delete a dialogue.

    The owner may always delete; anyone else needs DELETE_DIALOGUE.
    """
    await _authorize_owned(service, gate, auth_id, dialogue_id, Action.DELETE)
    await service.delete_dialogue(dialogue_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{dialogue_id}/publish",
    response_model=DialogueResponse,
    operation_id="publishDialogue",
)
async def publish_dialogue(
    dialogue_id: str,
    user_id: str = Depends(require_policy(Resource.DIALOGUE, Action.PUBLISH)),
    service: DialogueService = Depends(get_dialogue_service),
) -> DialogueResponse:
    """
    Publish a dialogue.

    Requires PUBLISH_DIALOGUE permission (moderators and administrators).
    """
    return await service.publish_dialogue(dialogue_id)


@router.delete(
    "/{dialogue_id}/publish",
    response_model=DialogueResponse,
    operation_id="unpublishDialogue",
)
async def unpublish_dialogue(
    dialogue_id: str,
    user_id: str = Depends(require_policy(Resource.DIALOGUE, Action.PUBLISH)),
    service: DialogueService = Depends(get_dialogue_service),
) -> DialogueResponse:
    """
    Withdraw a published dialogue.

    Requires PUBLISH_DIALOGUE permission, same as publishing.
    """
    return await service.unpublish_dialogue(dialogue_id)


@router.post(
    "/{dialogue_id}/play",
    response_model=PlayStatsResponse,
    operation_id="recordDialoguePlay",
)
async def record_play(
    dialogue_id: str,
    user_id: str = Depends(require_policy(Resource.DIALOGUE, Action.VIEW)),
    service: DialogueService = Depends(get_dialogue_service),
) -> PlayStatsResponse:
    """Count a play of a dialogue and return its updated play stats."""
    return await service.record_play(dialogue_id)
