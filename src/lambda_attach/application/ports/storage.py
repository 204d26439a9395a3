from __future__ import annotations
from typing import Optional, Protocol

class Storage(Protocol):
    bucket: str
    prefix: Optional[str]

    def upload(self, data: bytes, location: str, *, content_type: Optional[str] = None) -> None: ...
