from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SubmitForm:
    form_name: str
    fields: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EntrySelected:
    node_id: int


@dataclass(frozen=True)
class DeleteRequested:
    pass


PanelMessage = SubmitForm | EntrySelected | DeleteRequested
