"""Core types."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable


class SlotKind(str, Enum):
    STATIC = "static"
    EDITABLE = "editable"


class EditOp(str, Enum):
    """Kind of the last mutating edit, used to coalesce history entries."""
    NONE = "none"
    INPUT = "input"
    BACKSPACE = "backspace"


@dataclass(frozen=True, slots=True)
class FormatCharacter:
    """An editable character class bound to a pattern-source key."""
    validate: Callable[[str], bool]
    transform: Callable[[str], str] | None = None   # applied after validation


@dataclass(frozen=True, slots=True)
class Slot:
    """One position of a compiled pattern."""
    char: str              # literal for static slots, format key for editable ones
    kind: SlotKind
    index: int
    optional: bool = False

    @property
    def editable(self) -> bool:
        return self.kind is SlotKind.EDITABLE


@dataclass(frozen=True, slots=True)
class Selection:
    """Cursor (start == end) or range over buffer indices."""
    start: int = 0
    end: int = 0

    @property
    def collapsed(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Snapshot taken before a mutating edit."""
    value: str
    selection: Selection
    last_op: EditOp = EditOp.NONE
    start_undo: bool = False    # synthetic entry appended by the first undo
    buffer: tuple[str | None, ...] = ()     # slot entries; empty for value-only entries
