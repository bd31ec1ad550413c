"""Structured errors raised while loading mainframer configuration.

What:
  Define the exception hierarchy shared by the document adapter, the
  translator and the file loader. Each error keeps the structured fields that
  describe the failure and renders the exact user-facing message.

Why:
  Tests and callers need to inspect *which* field failed without parsing
  strings, while operators rely on the long-standing message wording. Keeping
  both in one object avoids drift between the two.

How:
  Every subclass stores its fields, then hands :attr:`ConfigError.message` to
  :class:`Exception` so ``str(exc)`` is the rendered text.

Interfaces:
  ``ConfigError`` with the loader errors ``ConfigAccessError``,
  ``ConfigReadError`` and ``ConfigFileError``; ``TranslationError`` with
  ``DocumentSyntaxError``, ``SectionShapeError``, ``FieldTypeError`` and
  ``LevelRangeError``.

Invariants & Safety:
  - A translation reports exactly one error; there is no aggregation.
  - Messages are single lines, except ``ConfigFileError`` which prefixes the
    underlying message with a line naming the file.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from .nodes import Node, render


class ConfigError(Exception):
    """Base class for every configuration failure.

    The base classes can be raised directly with a free-form ``detail``;
    subclasses derive :attr:`message` from their structured fields instead.
    """

    default_message = "Invalid configuration"

    def __init__(self, detail: Optional[str] = None) -> None:
        self._detail = detail
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return self._detail or self.default_message


class ConfigAccessError(ConfigError):
    """The configuration file could not be opened."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__()

    @property
    def message(self) -> str:
        return f"Could not open config file '{self.path}'"


class ConfigReadError(ConfigError):
    """The file was opened but its content is not readable UTF-8 text.

    This points at a broken environment rather than a user mistake; callers are
    not expected to recover from it.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__()

    @property
    def message(self) -> str:
        return f"Could not read config file '{self.path}'"


class TranslationError(ConfigError):
    """Base class for failures turning document text into the intermediate model."""

    default_message = "Invalid configuration document"


class ConfigFileError(ConfigError):
    """Wrap a :class:`TranslationError` with the path of the offending file."""

    def __init__(self, path: Path, cause: TranslationError) -> None:
        self.path = path
        self.cause = cause
        super().__init__()

    @property
    def message(self) -> str:
        return f"Error during parsing config file '{self.path}'\n{self.cause}"


class DocumentSyntaxError(TranslationError):
    """The YAML parser rejected the document."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__()

    @property
    def message(self) -> str:
        return f"YAML parsing error {self.detail}"


class SectionShapeError(TranslationError):
    """A top-level section is present but is not a mapping.

    ``echo_value`` controls whether the offending node is rendered; the
    ``compression`` section historically omits it.
    """

    def __init__(self, section: str, got: Node, *, echo_value: bool = True) -> None:
        self.section = section
        self.got = got
        self.echo_value = echo_value
        super().__init__()

    @property
    def message(self) -> str:
        text = f"'{self.section}' must be an object"
        if self.echo_value:
            text += f", but was {render(self.got)}"
        return text


class FieldTypeError(TranslationError):
    """A recognised field holds a node of the wrong kind.

    With ``echo_value`` the field name is quoted and the node rendered, as for
    compression levels; without it the short ``<field> must be <expected>``
    form is produced, as for ``remoteMachine.host``.
    """

    def __init__(self, field: str, expected: str, got: Node, *, echo_value: bool = True) -> None:
        self.field = field
        self.expected = expected
        self.got = got
        self.echo_value = echo_value
        super().__init__()

    @property
    def message(self) -> str:
        if not self.echo_value:
            return f"{self.field} must be {self.expected}"
        return f"'{self.field}' must be {self.expected}, but was {render(self.got)}"


class LevelRangeError(TranslationError):
    """A compression level is an integer outside ``[minimum, maximum]``."""

    def __init__(self, field: str, value: int, *, minimum: int = 1, maximum: int = 9) -> None:
        self.field = field
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__()

    @property
    def message(self) -> str:
        return (
            f"'{self.field}' must be a positive integer from {self.minimum} to {self.maximum}, "
            f"but was {self.value}"
        )
