"""Default format characters and the merge of caller overrides.

Each default is a regex-backed validator, optionally paired with a
transform applied to accepted characters:

    *   alphanumeric
    1   digit
    a   letter
    A   letter, uppercased
    #   alphanumeric, uppercased

The table is read-only; callers get a fresh dict from
``merge_format_characters`` and never share or mutate the defaults.
"""

from __future__ import annotations
import re
from types import MappingProxyType
from typing import Callable, Mapping

from .exceptions import InvalidFormatCharacterError
from .types import FormatCharacter

_DIGIT_RE = re.compile(r"\d", re.ASCII)
_LETTER_RE = re.compile(r"[A-Za-z]")
_ALPHANUMERIC_RE = re.compile(r"[\dA-Za-z]", re.ASCII)


def regex_validator(pattern: str | re.Pattern) -> Callable[[str], bool]:
    """Build a validator accepting a single character that fully matches ``pattern``."""
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    def validate(char: str) -> bool:
        return isinstance(char, str) and regex.fullmatch(char) is not None

    return validate


def _upper(char: str) -> str:
    return char.upper()


DEFAULT_FORMAT_CHARACTERS: Mapping[str, FormatCharacter] = MappingProxyType({
    "*": FormatCharacter(validate=regex_validator(_ALPHANUMERIC_RE)),
    "1": FormatCharacter(validate=regex_validator(_DIGIT_RE)),
    "a": FormatCharacter(validate=regex_validator(_LETTER_RE)),
    "A": FormatCharacter(validate=regex_validator(_LETTER_RE), transform=_upper),
    "#": FormatCharacter(validate=regex_validator(_ALPHANUMERIC_RE), transform=_upper),
})


def merge_format_characters(
    overrides: Mapping[str, FormatCharacter | None] | None = None,
) -> dict[str, FormatCharacter]:
    """Merge ``overrides`` over the defaults.

    A ``None`` value removes that key; any other value adds or replaces it.
    """
    merged = dict(DEFAULT_FORMAT_CHARACTERS)
    for key, definition in (overrides or {}).items():
        if not isinstance(key, str) or len(key) != 1:
            raise InvalidFormatCharacterError(
                f"format character keys must be single characters, got {key!r}"
            )
        if definition is None:
            merged.pop(key, None)
        else:
            merged[key] = definition
    return merged
