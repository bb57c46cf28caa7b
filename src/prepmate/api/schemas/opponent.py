from __future__ import annotations

from pydantic import BaseModel

from prepmate.models import PlayerRecord


class OpponentRequest(BaseModel):
    id: str
    debug: bool = False


class OpponentResponse(BaseModel):
    success: bool = True
    opponent: PlayerRecord
    category: str
    debug: str | None = None
