from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Record:
    """A host record owning one or more attachment fields."""

    type: str
    id: str
    fields: dict[str, Any] = field(default_factory=dict)

    def get(self, attribute: str) -> Any:
        return self.fields.get(attribute)

    def set(self, attribute: str, value: Any) -> None:
        self.fields[attribute] = value
