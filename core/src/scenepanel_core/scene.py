from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Literal

logger = logging.getLogger(__name__)

DrawableType = Literal["triangle", "text"]


@dataclass(frozen=True)
class Drawable:
    drawable_id: int
    type: DrawableType
    x: float = 0.0
    y: float = 0.0
    fields: dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> dict[str, Any]:
        """Wire shape of a drawable: ``{"type", "id", "x", "y", ...fields}``."""

        record: dict[str, Any] = {
            "type": self.type,
            "id": self.drawable_id,
            "x": self.x,
            "y": self.y,
        }
        record.update(self.fields)
        return record


class SceneRegistry:
    """Drawables of the running scene, keyed by a never-reused integer id."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._drawables: dict[int, Drawable] = {}
        self._next_id = 0

    def _add(self, type_: DrawableType, *, x: float, y: float, **fields: Any) -> Drawable:
        with self._lock:
            drawable = Drawable(drawable_id=self._next_id, type=type_, x=x, y=y, fields=fields)
            self._drawables[drawable.drawable_id] = drawable
            self._next_id += 1
        logger.info("Added %s drawable %d", type_, drawable.drawable_id)
        return drawable

    def add_triangle(self, *, x: float = 0.0, y: float = 0.0) -> Drawable:
        return self._add("triangle", x=x, y=y)

    def add_text(
        self, text: str, *, x: float = 0.0, y: float = 0.0, wavy: bool = False
    ) -> Drawable:
        if not text:
            raise ValueError("text must not be empty")
        return self._add("text", x=x, y=y, text=text, wavy=wavy)

    def remove(self, drawable_id: int) -> bool:
        with self._lock:
            removed = self._drawables.pop(drawable_id, None)
        if removed is None:
            return False
        logger.info("Removed %s drawable %d", removed.type, drawable_id)
        return True

    def get(self, drawable_id: int) -> Drawable | None:
        with self._lock:
            return self._drawables.get(drawable_id)

    def list_drawables(self) -> list[Drawable]:
        with self._lock:
            return [self._drawables[k] for k in sorted(self._drawables)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._drawables)
