"""Pattern compilation and value formatting.

A pattern source is compiled left to right into slots:

    \\x   the next character is a static slot, whatever it is
    ?     marks the preceding slot optional (creates no slot)
    key   a registered format character becomes an editable slot
    else  a static slot holding that literal

Usage:
    from input_mask import Pattern

    pattern = Pattern("11/11/1111")
    "".join(pattern.format_value(list("3112")))     # "31/12/____"
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Mapping, Sequence

from .exceptions import (
    EmptyPatternError,
    InvalidPlaceholderError,
    MalformedPatternError,
)
from .format_characters import DEFAULT_FORMAT_CHARACTERS
from .types import FormatCharacter, Slot, SlotKind

logger = logging.getLogger(__name__)

ESCAPE_CHAR = "\\"
OPTIONAL_CHAR = "?"
DEFAULT_PLACEHOLDER_CHAR = "_"


def check_placeholder(placeholder_char: str) -> None:
    if not isinstance(placeholder_char, str) or len(placeholder_char) > 1:
        raise InvalidPlaceholderError(
            "placeholder_char should be a single character or an empty string, "
            f"got {placeholder_char!r}"
        )


@dataclass(slots=True)
class _OptionalSlot:
    """Bookkeeping for an optional slot seen by ``format_value``."""
    value_index: int
    pattern_index: int
    pending: bool = True


class Pattern:
    """Compiled, immutable mask pattern."""

    __slots__ = (
        "source", "placeholder_char", "format_characters", "is_revealing_mask",
        "slots", "length", "first_editable_index", "last_editable_index",
    )

    def __init__(
        self,
        source: str,
        format_characters: Mapping[str, FormatCharacter] | None = None,
        placeholder_char: str = DEFAULT_PLACEHOLDER_CHAR,
        is_revealing_mask: bool = False,
    ) -> None:
        check_placeholder(placeholder_char)
        self.source = source
        self.placeholder_char = placeholder_char
        self.format_characters: Mapping[str, FormatCharacter] = MappingProxyType(
            dict(DEFAULT_FORMAT_CHARACTERS if format_characters is None else format_characters)
        )
        self.is_revealing_mask = is_revealing_mask
        self.slots, self.first_editable_index, self.last_editable_index = self._compile()
        self.length = len(self.slots)
        logger.debug(
            "compiled pattern %r: %d slots, editable %d..%d",
            source, self.length, self.first_editable_index, self.last_editable_index,
        )

    def _compile(self) -> tuple[tuple[Slot, ...], int, int]:
        slots: list[Slot] = []
        first: int | None = None
        last: int | None = None

        i, n = 0, len(self.source)
        while i < n:
            char = self.source[i]
            kind = SlotKind.STATIC

            if char == ESCAPE_CHAR:
                if i == n - 1:
                    raise MalformedPatternError(
                        f'pattern "{self.source}" ends with a raw {ESCAPE_CHAR}'
                    )
                i += 1
                char = self.source[i]
            elif char == OPTIONAL_CHAR:
                if not slots:
                    raise MalformedPatternError(
                        f'pattern "{self.source}" starts with {OPTIONAL_CHAR} '
                        "and has no slot to mark optional"
                    )
                slots[-1] = replace(slots[-1], optional=True)
                i += 1
                continue
            elif char in self.format_characters:
                if first is None:
                    first = len(slots)
                last = len(slots)
                kind = SlotKind.EDITABLE

            slots.append(Slot(char=char, kind=kind, index=len(slots)))
            i += 1

        if first is None or last is None:
            raise EmptyPatternError(
                f'pattern "{self.source}" does not contain any editable characters'
            )
        return tuple(slots), first, last

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return f"Pattern({self.source!r}, revealing={self.is_revealing_mask})"

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format_value(self, value: Sequence[str]) -> list[str | None]:
        """Map raw characters onto slots.

        Returns one entry per slot: a transformed value, a static literal,
        the placeholder for an empty editable slot, or None for an optional
        slot left empty.  In revealing mode the result stops after the
        furthest slot reached by valid input, so it may be shorter than the
        pattern.

        Optional slots are first assumed empty.  When the last editable slot
        is reached with input still left over, the most recent pending
        optional is taken to hold a value: the output is cut back to it and
        formatting resumes from there.
        """
        buffer: list[str | None] = []
        optionals: dict[int, _OptionalSlot] = {}

        if self.is_revealing_mask and not value:
            return buffer

        value_index = 0
        i = 0
        while i < self.length:
            char = value[value_index] if value_index < len(value) else None
            has_more = value_index + 1 < len(value)
            pending = [o for o in optionals.values() if o.pending]

            if self.is_optional_index(i) and i not in optionals:
                optionals[i] = _OptionalSlot(value_index=value_index, pattern_index=i)
                buffer.append(None)
                value_index -= 1
            elif has_more and i == self.last_editable_index and pending:
                optional = max(pending, key=lambda o: o.pattern_index)
                del buffer[optional.pattern_index:]
                value_index = optional.value_index - 1
                i = optional.pattern_index - 1
                optional.pending = False
            elif self.is_editable_index(i):
                valid = self.is_valid_at_index(char, i)
                if self.is_revealing_mask and not valid:
                    break
                buffer.append(self.transform(char, i) if valid else self.placeholder_char)
            else:
                literal = self.slots[i].char
                buffer.append(literal)
                # Literals may or may not appear in the raw value
                if char != literal:
                    value_index -= 1

            if (self.is_revealing_mask
                    and value_index + 1 >= len(value)
                    and i < self.last_editable_index):
                break

            value_index += 1
            i += 1

        return buffer

    # ------------------------------------------------------------------
    # Slot queries
    # ------------------------------------------------------------------

    def is_editable_index(self, index: int) -> bool:
        return 0 <= index < self.length and self.slots[index].editable

    def is_optional_index(self, index: int) -> bool:
        return 0 <= index < self.length and self.slots[index].optional

    def is_valid_at_index(self, char: str | None, index: int) -> bool:
        """Whether ``char`` may occupy slot ``index``.

        Editable slots defer to their format character; static slots only
        accept their own literal.
        """
        if char is None or not 0 <= index < self.length:
            return False
        slot = self.slots[index]
        if slot.editable:
            return bool(self.format_characters[slot.char].validate(char))
        return slot.char == char

    def transform(self, char: str, index: int) -> str:
        slot = self.slots[index]
        if slot.editable:
            fmt = self.format_characters[slot.char]
            return fmt.transform(char) if fmt.transform is not None else char
        return char

    def char_at(self, index: int) -> str:
        return self.slots[index].char


def format_value_to_pattern(
    value: str,
    source: str,
    *,
    format_characters: Mapping[str, FormatCharacter] | None = None,
    placeholder_char: str = DEFAULT_PLACEHOLDER_CHAR,
    is_revealing_mask: bool = False,
) -> str:
    """Format ``value`` against a pattern source in one call."""
    pattern = Pattern(source, format_characters, placeholder_char, is_revealing_mask)
    return "".join(c or "" for c in pattern.format_value(list(value)))
