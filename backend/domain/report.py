"""Report section handed to the rendering layer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Union

EntryValue = Union[str, int]


@dataclass
class ReportSection:
    name: str
    entries: Dict[str, EntryValue] = field(default_factory=dict)

    def add(self, label: str, value: EntryValue) -> None:
        self.entries[label] = value

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "entries": dict(self.entries)}
