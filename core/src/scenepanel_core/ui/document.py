from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Final, cast

LOG_CONTAINER_ID: Final[str] = "commandLog"
LIST_CONTAINER_ID: Final[str] = "selector"

LINE_CLASS: Final[str] = "log-line"
SELECTED_CLASS: Final[str] = "selected"


class ElementNotFoundError(LookupError):
    """Raised when a container or entry the panel relies on is not in the document."""


@dataclass(frozen=True)
class LogLine:
    text: str
    classes: tuple[str, ...] = (LINE_CLASS,)


@dataclass
class EntryNode:
    node_id: int
    label: str
    classes: set[str] = field(default_factory=lambda: {LINE_CLASS})

    @property
    def selected(self) -> bool:
        return SELECTED_CLASS in self.classes


class LogContainer:
    element_id = LOG_CONTAINER_ID

    def __init__(self) -> None:
        self._lines: list[LogLine] = []

    def append_line(self, text: str) -> None:
        self._lines.append(LogLine(text=text))

    @property
    def lines(self) -> Sequence[LogLine]:
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)


class ListContainer:
    element_id = LIST_CONTAINER_ID

    def __init__(self) -> None:
        self._nodes: list[EntryNode] = []

    def append(self, node: EntryNode) -> None:
        self._nodes.append(node)

    def remove(self, node: EntryNode) -> None:
        try:
            self._nodes.remove(node)
        except ValueError:
            raise ElementNotFoundError(
                f"entry {node.node_id} is not in #{self.element_id}"
            ) from None

    def find(self, node_id: int) -> EntryNode | None:
        for node in self._nodes:
            if node.node_id == node_id:
                return node
        return None

    def __iter__(self) -> Iterator[EntryNode]:
        return iter(tuple(self._nodes))

    def __len__(self) -> int:
        return len(self._nodes)


class Document:
    """The panel page: a log container and a list container, looked up by element id."""

    def __init__(self, *, with_log: bool = True, with_list: bool = True) -> None:
        self._elements: dict[str, LogContainer | ListContainer] = {}
        if with_log:
            self._elements[LOG_CONTAINER_ID] = LogContainer()
        if with_list:
            self._elements[LIST_CONTAINER_ID] = ListContainer()

    def get_element_by_id(self, element_id: str) -> LogContainer | ListContainer:
        element = self._elements.get(element_id)
        if element is None:
            raise ElementNotFoundError(f"no element with id {element_id!r}")
        return element

    @property
    def command_log(self) -> LogContainer:
        return cast(LogContainer, self.get_element_by_id(LOG_CONTAINER_ID))

    @property
    def selector(self) -> ListContainer:
        return cast(ListContainer, self.get_element_by_id(LIST_CONTAINER_ID))
