from typing import Optional

from pydantic import Field

from .base import CamelModel


class MessageCreate(CamelModel):
    receiver_id: int
    message_text: str = Field(..., min_length=1, max_length=5000)
    skill_request_id: Optional[int] = None
