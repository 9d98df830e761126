"""MaskEditor — the main API.  A live edit buffer over a compiled Pattern.

Usage:
    from input_mask import MaskEditor, Selection

    editor = MaskEditor("1111 1111 1111 1111")
    editor.get_value()              # "____ ____ ____ ____"

    for char in "41111":
        editor.input(char)
    editor.get_value()              # "4111 1___ ____ ____"
    editor.selection                # Selection(start=6, end=6)

    editor.backspace()
    editor.undo()
    editor.paste("1111 1111 1111")

Every edit returns True when it changed the value or selection and False
when the edit was rejected, in which case nothing changes.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Mapping

from .exceptions import MissingPatternError
from .format_characters import merge_format_characters
from .history import History
from .pattern import DEFAULT_PLACEHOLDER_CHAR, Pattern, check_placeholder
from .types import EditOp, FormatCharacter, HistoryEntry, Selection

logger = logging.getLogger(__name__)


@dataclass
class EditorConfig:
    """Construction options for a MaskEditor."""
    pattern: str
    # Merged over the defaults; None removes a default key
    format_characters: dict[str, FormatCharacter | None] = field(default_factory=dict)
    placeholder_char: str = DEFAULT_PLACEHOLDER_CHAR
    is_revealing_mask: bool = False     # hide the mask past the furthest value
    value: str = ""
    selection: Selection = field(default_factory=Selection)


class MaskEditor:
    """Edit state machine: slot buffer, selection and undo history."""

    def __init__(
        self,
        pattern: str,
        *,
        format_characters: Mapping[str, FormatCharacter | None] | None = None,
        placeholder_char: str = DEFAULT_PLACEHOLDER_CHAR,
        is_revealing_mask: bool = False,
        value: str = "",
        selection: Selection | None = None,
    ) -> None:
        if pattern is None:
            raise MissingPatternError("you must provide a pattern")
        check_placeholder(placeholder_char)

        self.placeholder_char = placeholder_char
        self.format_characters = merge_format_characters(format_characters)
        self.pattern: Pattern | None = None
        self.empty_value = ""
        self._buffer: list[str | None] = []
        self._selection = Selection()
        self._history = History()

        self.set_pattern(
            pattern,
            value=value,
            selection=selection,
            is_revealing_mask=is_revealing_mask,
        )

    @classmethod
    def from_config(cls, config: EditorConfig) -> "MaskEditor":
        return cls(
            config.pattern,
            format_characters=config.format_characters,
            placeholder_char=config.placeholder_char,
            is_revealing_mask=config.is_revealing_mask,
            value=config.value,
            selection=config.selection,
        )

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def input(self, char: str) -> bool:
        """Apply one character of input at the current cursor or selection."""
        pattern = self.pattern
        buffer_before = list(self._buffer)
        selection_before = self._selection
        value_before = self.get_value()

        # At the end of the editable region the only room left is a pending
        # optional slot: shift the entered values into it and step back.
        if (self._selection.collapsed
                and self._selection.start > pattern.last_editable_index):
            if self.pending_optional() is None:
                logger.debug("input %r rejected: cursor at end of pattern", char)
                return False
            self._fill_optional()
            self._selection = Selection(self._selection.start - 1, self._selection.end - 1)

        input_index = self._selection.start
        target = self._next_input_index(char, input_index)
        if target is None or not pattern.is_valid_at_index(char, target):
            logger.debug("input %r rejected at %d", char, input_index)
            self._buffer = buffer_before
            self._selection = selection_before
            return False

        # Statics (and skipped optionals) up to the target slot
        for index in range(input_index, target):
            self._buffer[index] = None if pattern.is_optional_index(index) else pattern.char_at(index)

        self._buffer[target] = pattern.transform(char, target)

        if target == pattern.last_editable_index and self.pending_optional() is None:
            for index in range(target + 1, pattern.length):
                self._buffer[index] = pattern.char_at(index)

        if target + 1 < self._selection.end:
            self._clear(target + 1, self._selection.end)

        self._selection = Selection(target + 1, target + 1)
        self._history.record(
            EditOp.INPUT, value_before, selection_before, self._selection, tuple(buffer_before),
        )
        return True

    def backspace(self) -> bool:
        """Delete the selected range, or the editable value before the cursor."""
        selection = self._selection
        if selection.start == 0 and selection.end == 0:
            return False

        value_before = self.get_value()
        buffer_before = tuple(self._buffer)
        if selection.collapsed:
            start = selection.start - 1
            while start > 0 and not self.pattern.is_editable_index(start):
                start -= 1
            # Fixed masks clear through the cursor slot itself
            stop = selection.end if self.pattern.is_revealing_mask else selection.end + 1
        else:
            start, stop = selection.start, selection.end
        self._clear(start, stop)

        self._selection = Selection(start, start)
        self._history.record(
            EditOp.BACKSPACE, value_before, selection, self._selection, buffer_before,
        )
        return True

    def paste(self, text: str) -> bool:
        """Input ``text`` character by character, all or nothing.

        The text may contain the pattern's literals between values.  Input
        past the last editable slot is ignored.  If the cursor is inside a
        static prefix, the text must begin with the rest of that prefix.
        """
        pattern = self.pattern
        snapshot = (list(self._buffer), self._selection, self._history.snapshot())

        first = pattern.first_editable_index
        if self._selection.start < first:
            prefix = "".join(pattern.char_at(i) for i in range(self._selection.start, first))
            if not text.startswith(prefix):
                logger.debug("paste rejected: %r does not start with %r", text, prefix)
                return False
            text = text[len(prefix):]
            self._selection = Selection(first, max(self._selection.end, first))

        stepped_over: list[str] = []
        for char in text:
            if self._selection.start > pattern.last_editable_index:
                break
            start = self._selection.start
            if self.input(char):
                stepped_over = [
                    pattern.char_at(i)
                    for i in range(start, self._selection.start - 1)
                    if not pattern.is_editable_index(i)
                ]
                continue
            # A literal the previous character already stepped over
            if stepped_over and stepped_over[0] == char:
                stepped_over.pop(0)
                continue

            logger.debug("paste of %r rolled back at %r", text, char)
            self._buffer, self._selection, self._history = snapshot
            return False

        return True

    def undo(self) -> bool:
        entry = self._history.undo(self.get_value(), self._selection, tuple(self._buffer))
        if entry is None:
            return False
        self._restore(entry)
        return True

    def redo(self) -> bool:
        entry = self._history.redo()
        if entry is None:
            return False
        self._restore(entry)
        return True

    def _restore(self, entry: HistoryEntry) -> None:
        # Restored slot by slot: the rendered value loses empty slots when
        # the placeholder is ""
        if entry.buffer:
            self._buffer = list(entry.buffer)
        else:
            self.set_value(entry.value)
        self._selection = entry.selection

    # ------------------------------------------------------------------
    # Getters & setters
    # ------------------------------------------------------------------

    @property
    def selection(self) -> Selection:
        return self._selection

    @selection.setter
    def selection(self, selection: Selection) -> None:
        self._selection = self._clamp(selection)

    @property
    def history(self) -> History:
        return self._history

    def set_selection(self, selection: Selection) -> bool:
        """Set the selection, snapping a collapsed cursor to the entered value.

        A cursor before the first editable slot moves to it; otherwise it
        moves back to just after the nearest entered value.  Ranges are kept
        as given.  Returns True if the requested selection was adjusted.
        """
        self._selection = self._clamp(selection)
        if self._selection.collapsed:
            first = self.pattern.first_editable_index
            index = max(self._selection.start, first)
            while index > first and not (
                self.pattern.is_editable_index(index - 1) and self._has_value(index - 1)
            ):
                index -= 1
            self._selection = Selection(index, index)
        return self._selection != selection

    def set_value(self, value: str | None) -> None:
        formatted = self.pattern.format_value(list(value or ""))
        self._buffer = [
            formatted[i] if i < len(formatted) else None
            for i in range(self.pattern.length)
        ]

    def get_value(self) -> str:
        return "".join(c or "" for c in self._buffer)

    def get_raw_value(self) -> str:
        """Entered characters with static literals stripped."""
        return "".join(
            c or ""
            for i, c in enumerate(self._buffer)
            if self.pattern.is_editable_index(i)
        )

    def set_pattern(
        self,
        pattern: str,
        *,
        value: str = "",
        selection: Selection | None = None,
        is_revealing_mask: bool | None = None,
    ) -> None:
        """Replace the pattern, rebuild the buffer from ``value`` and reset history."""
        if is_revealing_mask is None:
            is_revealing_mask = self.pattern.is_revealing_mask if self.pattern is not None else False

        self.pattern = Pattern(
            pattern, self.format_characters, self.placeholder_char, is_revealing_mask,
        )
        self._buffer = [None] * self.pattern.length
        self.set_value(value)
        self.empty_value = "".join(c or "" for c in self.pattern.format_value([]))
        self._selection = self._clamp(selection or Selection())
        self._history.reset(self._selection)

    def pending_optional(self) -> int | None:
        """Highest optional slot still holding no value, if any."""
        pending = [
            i for i, c in enumerate(self._buffer)
            if c is None and self.pattern.is_optional_index(i)
        ]
        return max(pending) if pending else None

    # ------------------------------------------------------------------
    # Buffer helpers
    # ------------------------------------------------------------------

    def _next_input_index(self, char: str, start: int) -> int | None:
        """First editable, non-optional slot from ``start``, or a static slot matching ``char``."""
        pattern = self.pattern
        index = start
        while not pattern.is_editable_index(index) or pattern.is_optional_index(index):
            if not pattern.is_editable_index(index) and pattern.is_valid_at_index(char, index):
                break
            if index > pattern.last_editable_index:
                return None
            index += 1
        return index

    def _has_value(self, index: int) -> bool:
        return self._buffer[index] not in (None, self.placeholder_char)

    def _clear(self, start: int, stop: int) -> None:
        """Empty the slots in ``[start, stop)``.

        A revealing mask also slides the values after the gap left and hides
        everything past the last one.
        """
        if self.pattern.is_revealing_mask:
            self._shift_left(start, stop)
            return
        for index in range(start, stop):
            if self.pattern.is_editable_index(index):
                self._buffer[index] = self.placeholder_char

    def _fill_optional(self) -> None:
        """Move the values after the pending optional slot left into it."""
        pending = self.pending_optional()
        self._shift_left(pending, pending + 1)

    def _shift_left(self, start: int, stop: int) -> None:
        """Drop ``[start, stop)`` and repack the editable values from ``stop`` at ``start``."""
        pattern = self.pattern
        carried = [
            self._buffer[i] for i in range(stop, pattern.length)
            if pattern.is_editable_index(i) and self._has_value(i)
        ]
        for i in range(start, pattern.length):
            self._buffer[i] = None

        index = start
        for char in carried:
            while index < pattern.length and not pattern.is_editable_index(index):
                self._buffer[index] = pattern.char_at(index)
                index += 1
            if index >= pattern.length:
                break
            if pattern.is_valid_at_index(char, index):
                self._buffer[index] = char
                index += 1

        if not pattern.is_revealing_mask:
            for i in range(index, pattern.length):
                if pattern.is_optional_index(i):
                    continue
                self._buffer[i] = (
                    self.placeholder_char if pattern.is_editable_index(i) else pattern.char_at(i)
                )

    def _clamp(self, selection: Selection) -> Selection:
        length = self.pattern.length if self.pattern is not None else 0
        start = min(max(selection.start, 0), length)
        end = min(max(selection.end, start), length)
        return Selection(start, end)
