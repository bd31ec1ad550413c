"""Locate, read and serialise mainframer configuration files.

What:
  Provide the file-facing entry points around the translator: find the
  configuration file of a project, read it into an
  :class:`IntermediateConfig`, and write a model back as YAML text.

Why:
  The translator is a pure function of a node tree. Opening files, decoding
  bytes and naming the offending path in error messages belong in one thin
  layer so every caller reports failures the same way.

How:
  :func:`load` opens the file and reads it inside a ``with`` block, decodes
  UTF-8, then hands the text to :func:`translate_text`. OS and decoding
  failures become :class:`ConfigAccessError`/:class:`ConfigReadError`;
  translation failures are wrapped in :class:`ConfigFileError` with the
  original error chained. Outcomes are reported through :class:`JsonLogger`.

Interfaces:
  :func:`locate`, :func:`load`, :func:`dump`, ``CONFIG_RELATIVE_PATH``.

Invariants:
  - The loader performs no validation of its own.
  - The file handle is closed on every exit path.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from ..utils.logging import JsonLogger, get_logger
from . import yamlshim
from .errors import (
    ConfigAccessError,
    ConfigError,
    ConfigFileError,
    ConfigReadError,
    TranslationError,
)
from .schema import IntermediateConfig
from .translator import COMPRESSION, REMOTE_MACHINE, translate_text


CONFIG_RELATIVE_PATH = Path(".mainframer") / "config.yml"
_COMPONENT = "config.loader"


def _candidate_paths(project_dir: Path, path: Optional[Path]) -> Iterable[Path]:
    """Yield configuration file locations in priority order, without duplicates."""

    seen: set[Path] = set()
    candidates = []
    if path is not None:
        candidates.append(path.expanduser())
    candidates.append(project_dir.expanduser() / CONFIG_RELATIVE_PATH)
    for candidate in candidates:
        if candidate not in seen:
            seen.add(candidate)
            yield candidate


def locate(
    project_dir: Path | str,
    path: Optional[Path | str] = None,
    *,
    logger: Optional[JsonLogger] = None,
) -> Path:
    """Resolve the configuration file used for ``project_dir``.

    What:
      Pick the explicit ``path`` when given, otherwise
      ``<project_dir>/.mainframer/config.yml``.

    Why:
      Callers should not repeat the discovery rule. Returning a path even when
      nothing exists lets :func:`load` report the standard access error.

    How:
      Walk :func:`_candidate_paths` and return the first existing file. When
      none exists, log a warning and return the highest-priority candidate.

    Args:
      project_dir: Root directory of the project being built.
      path: Optional explicit configuration file.
      logger: Logger receiving the ``config_missing`` warning.

    Returns:
      Path to hand to :func:`load`.
    """

    requested = Path(path) if path is not None else None
    candidates = list(_candidate_paths(Path(project_dir), requested))
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    logger = logger or get_logger(_COMPONENT)
    logger.warning("config_missing", searched=[str(candidate) for candidate in candidates])
    return candidates[0]


def load(path: Path | str, *, logger: Optional[JsonLogger] = None) -> IntermediateConfig:
    """Read and translate the configuration file at ``path``.

    What:
      Produce a validated :class:`IntermediateConfig` from a file on disk.

    Why:
      Gives every caller identical error wording, always naming the file.

    How:
      Open the file in binary mode, decode it as UTF-8 inside the ``with``
      block, and translate the text. Failures are logged as
      ``config_invalid`` before being raised.

    Args:
      path: Location of the configuration file.
      logger: Destination for ``config_loaded``/``config_invalid`` entries.

    Returns:
      The validated configuration.

    Raises:
      ConfigAccessError: If the file cannot be opened.
      ConfigReadError: If the content cannot be read as UTF-8 text.
      ConfigFileError: If parsing or translation fails; ``cause`` holds the
        underlying :class:`TranslationError`.
    """

    path = Path(path)
    logger = (logger or get_logger(_COMPONENT)).bind(path=str(path))
    try:
        config = _load(path)
    except ConfigError as exc:
        logger.error("config_invalid", kind=type(exc).__name__)
        raise
    present = ((REMOTE_MACHINE, config.remote_machine), (COMPRESSION, config.compression))
    sections = [name for name, value in present if value is not None]
    logger.info("config_loaded", sections=sections)
    return config


def _load(path: Path) -> IntermediateConfig:
    try:
        handle = path.open("rb")
    except OSError as exc:
        raise ConfigAccessError(path) from exc
    with handle:
        try:
            text = handle.read().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigReadError(path) from exc
    try:
        return translate_text(text)
    except TranslationError as exc:
        raise ConfigFileError(path, exc) from exc


def dump(config: IntermediateConfig) -> str:
    """Serialise ``config`` as YAML text using the document key spelling.

    Unset fields are omitted, so translating the result yields a model equal
    to ``config``.
    """

    return yamlshim.dump(config.model_dump(by_alias=True, exclude_none=True))
