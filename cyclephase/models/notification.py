"""
Notification model definition.
"""
from datetime import datetime, timezone
from pydantic import BaseModel, Field

def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()

class Notification(BaseModel):
    """
    An in-app notification shown in the user's notification list.
    """
    user_id: str
    type: str = Field(..., pattern="^(workout|water|period|system)$")
    message: str
    read: bool = False
    created_at: str = Field(default_factory=_utc_now)
