"""Input Mask — masked text input with a live edit state and undo history."""

from .editor import MaskEditor, EditorConfig
from .pattern import Pattern, format_value_to_pattern
from .history import History
from .format_characters import DEFAULT_FORMAT_CHARACTERS, merge_format_characters
from .config import create_editor, load_config, load_from_yaml
from .types import EditOp, FormatCharacter, HistoryEntry, Selection, Slot, SlotKind
from .exceptions import (
    ConfigError,
    EmptyPatternError,
    InputMaskError,
    InvalidFormatCharacterError,
    InvalidPlaceholderError,
    MalformedPatternError,
    MissingPatternError,
)

__all__ = [
    "MaskEditor", "EditorConfig",
    "Pattern", "format_value_to_pattern",
    "History",
    "DEFAULT_FORMAT_CHARACTERS", "merge_format_characters",
    "create_editor", "load_config", "load_from_yaml",
    "EditOp", "FormatCharacter", "HistoryEntry", "Selection", "Slot", "SlotKind",
    "InputMaskError", "MissingPatternError", "MalformedPatternError",
    "EmptyPatternError", "InvalidPlaceholderError", "InvalidFormatCharacterError",
    "ConfigError",
]
__version__ = "0.1.0"
