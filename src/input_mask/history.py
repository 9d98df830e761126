"""History — linear undo/redo log for a MaskEditor.

Entries are snapshots taken *before* an edit.  Consecutive edits of the
same kind that continue from where the previous one left the cursor are
coalesced into a single entry, so typing a run of characters undoes in one
step.  The first ``undo`` after editing appends a synthetic ``start_undo``
entry holding the current state so ``redo`` can return to it.
"""

from __future__ import annotations
import logging
from typing import Sequence

from .types import EditOp, HistoryEntry, Selection

logger = logging.getLogger(__name__)


class History:
    """Single-branch history with a floating redo cursor."""

    __slots__ = ("_entries", "_index", "last_op", "last_selection")

    def __init__(self, selection: Selection | None = None) -> None:
        self._entries: list[HistoryEntry] = []
        self._index: int | None = None      # None while not undoing
        self.last_op: EditOp = EditOp.NONE
        self.last_selection: Selection | None = selection

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def continues(self, op: EditOp, selection_before: Selection) -> bool:
        """Whether ``op`` from ``selection_before`` extends the previous edit."""
        return (
            self.last_op is op
            and selection_before.collapsed
            and (self.last_selection is None
                 or selection_before.start == self.last_selection.start)
        )

    def record(
        self,
        op: EditOp,
        value_before: str,
        selection_before: Selection,
        selection_after: Selection,
        buffer_before: Sequence[str | None] = (),
    ) -> None:
        """Record an edit that has just been applied."""
        if self._index is not None:
            # New edit after undoing: the redo branch is abandoned
            del self._entries[self._index:]
            self._index = None
        if not self.continues(op, selection_before):
            self._entries.append(HistoryEntry(
                value=value_before,
                selection=selection_before,
                last_op=self.last_op,
                buffer=tuple(buffer_before),
            ))
        self.last_op = op
        self.last_selection = selection_after

    # ------------------------------------------------------------------
    # Undo / redo
    # ------------------------------------------------------------------

    def undo(
        self,
        value: str,
        selection: Selection,
        buffer: Sequence[str | None] = (),
    ) -> HistoryEntry | None:
        """Step back one entry; the arguments describe the current state."""
        if not self._entries or self._index == 0:
            return None

        if self._index is None:
            self._index = len(self._entries) - 1
            entry = self._entries[self._index]
            if (entry.value != value
                    or entry.buffer != tuple(buffer)
                    or entry.selection != selection):
                self._entries.append(HistoryEntry(
                    value=value,
                    selection=selection,
                    last_op=self.last_op,
                    start_undo=True,
                    buffer=tuple(buffer),
                ))
        else:
            self._index -= 1
            entry = self._entries[self._index]

        logger.debug("undo to entry %d of %d", self._index, len(self._entries))
        self.last_op = entry.last_op
        return entry

    def redo(self) -> HistoryEntry | None:
        if not self._entries or self._index is None:
            return None
        if self._index + 1 >= len(self._entries):
            # Nothing was appended by the first undo; already at the newest state
            self._index = None
            return None

        self._index += 1
        entry = self._entries[self._index]
        if self._index == len(self._entries) - 1:
            self._index = None
            if entry.start_undo:
                self._entries.pop()

        logger.debug("redo to entry %s", self._index)
        self.last_op = entry.last_op
        return entry

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def undoing(self) -> bool:
        return self._index is not None

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def snapshot(self) -> History:
        """Independent copy, used to roll back a failed paste."""
        copy = History(self.last_selection)
        copy._entries = list(self._entries)
        copy._index = self._index
        copy.last_op = self.last_op
        return copy

    def reset(self, selection: Selection | None = None) -> None:
        self._entries.clear()
        self._index = None
        self.last_op = EditOp.NONE
        self.last_selection = selection
