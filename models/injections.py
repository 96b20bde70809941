from __future__ import annotations
from pydantic import BaseModel, Field
import time

class InjectionModel(BaseModel):
    """A message on its way into an agent context."""
    from_id: str
    content: str
    stamped: bool = False
    ts: float = Field(default_factory=time.time)
