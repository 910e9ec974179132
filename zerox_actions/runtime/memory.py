from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from zerox_actions.utils.common import snake_to_camel


class Content(BaseModel):
    """Payload of a chat message or a stored memory."""

    model_config = ConfigDict(extra='allow')

    text: str
    type: Optional[str] = None
    action: Optional[str] = None
    content: Optional[dict[str, Any]] = None


class Memory(BaseModel):
    model_config = ConfigDict(alias_generator=snake_to_camel, populate_by_name=True)

    room_id: UUID
    user_id: UUID
    agent_id: Optional[UUID] = None
    content: Content
