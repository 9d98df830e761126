"""
Exception hierarchy for input-mask.

Every error is raised while a pattern or editor is being built, never while
editing: rejected keystrokes and pastes are reported as ``False`` return
values instead.  All exceptions inherit from :class:`InputMaskError`.
"""


class InputMaskError(ValueError):
    """Base exception for all input-mask errors."""

    pass


class MissingPatternError(InputMaskError):
    """Raised when an editor is created without a pattern."""

    pass


class MalformedPatternError(InputMaskError):
    """Raised when a pattern ends with a raw escape or starts with an optional marker."""

    pass


class EmptyPatternError(InputMaskError):
    """Raised when a pattern compiles to zero editable slots."""

    pass


class InvalidPlaceholderError(InputMaskError):
    """Raised when the placeholder is not a single character or an empty string."""

    pass


class InvalidFormatCharacterError(InputMaskError):
    """Raised when a format-character key is not exactly one character."""

    pass


class ConfigError(InputMaskError):
    """Raised when a config dict or YAML file cannot be turned into an editor."""

    pass
