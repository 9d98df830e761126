"""YAML/dict config loader for input-mask.

Supports loading from a YAML file or a plain dict (for embedding in a
larger form or application config).

Example YAML:

    input_mask:
      pattern: "AA-1111-hh"
      placeholder_char: "_"
      revealing: false
      value: ""
      selection:
        start: 0
        end: 0
      format_characters:
        h:
          regex: "[0-9a-fA-F]"
          transform: upper     # "upper", "lower" or null
        "#": null              # remove a default
"""

from __future__ import annotations
import re
from pathlib import Path
from typing import Any, Callable

from .editor import MaskEditor
from .exceptions import ConfigError
from .format_characters import regex_validator
from .pattern import DEFAULT_PLACEHOLDER_CHAR
from .types import FormatCharacter, Selection

_TRANSFORMS: dict[str, Callable[[str], str]] = {
    "upper": str.upper,
    "lower": str.lower,
}


def _format_character(key: str, entry: Any) -> FormatCharacter | None:
    """Build one format character from ``{regex, transform}``; None removes it."""
    if entry is None:
        return None
    if isinstance(entry, FormatCharacter):
        return entry
    if not isinstance(entry, dict) or "regex" not in entry:
        raise ConfigError(f"format character {key!r} needs a 'regex' entry")

    try:
        validate = regex_validator(re.compile(entry["regex"]))
    except re.error as e:
        raise ConfigError(f"format character {key!r} has an invalid regex: {e}") from e

    transform_name = entry.get("transform")
    if transform_name is not None and transform_name not in _TRANSFORMS:
        raise ConfigError(
            f"format character {key!r} has unknown transform {transform_name!r}"
        )
    return FormatCharacter(
        validate=validate,
        transform=_TRANSFORMS[transform_name] if transform_name else None,
    )


def load_config(data: dict[str, Any]) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline) into MaskEditor kwargs."""
    # Support nested under "input_mask" key or flat
    if "input_mask" in data:
        data = data["input_mask"]

    if data.get("pattern") is None:
        raise ConfigError("config must define a pattern")

    selection = data.get("selection") or {}
    try:
        start = int(selection.get("start", 0))
        end = int(selection.get("end", start))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid selection {selection!r}") from e

    revealing = data.get("is_revealing_mask", data.get("revealing", False))
    if not isinstance(revealing, bool):
        raise ConfigError(f"is_revealing_mask must be true or false, got {revealing!r}")

    return {
        "pattern": str(data["pattern"]),
        "placeholder_char": data.get("placeholder_char", DEFAULT_PLACEHOLDER_CHAR),
        "is_revealing_mask": revealing,
        "value": str(data.get("value") or ""),
        "selection": Selection(start, end),
        "format_characters": {
            str(key): _format_character(str(key), entry)
            for key, entry in (data.get("format_characters") or {}).items()
        },
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml
    with open(path) as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    return load_config(data)


def create_editor(config: dict[str, Any]) -> MaskEditor:
    """Create a fully configured editor from a config dict."""
    cfg = config if isinstance(config.get("selection"), Selection) else load_config(config)
    return MaskEditor(
        cfg["pattern"],
        format_characters=cfg["format_characters"],
        placeholder_char=cfg["placeholder_char"],
        is_revealing_mask=cfg["is_revealing_mask"],
        value=cfg["value"],
        selection=cfg["selection"],
    )
