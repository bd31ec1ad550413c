"""mainframer configuration package.

What:
  Provide the supported import surface for turning configuration files into
  the validated intermediate model.

Why:
  Callers should go through the translator rather than inspect raw document
  nodes themselves; keeping ``__all__`` explicit documents which helpers are
  part of that contract.

How:
  Re-export the loader helpers, the translator entry points, the pydantic
  models and the error hierarchy.

Interfaces:
  - load / locate / dump: File discovery, reading and serialisation.
  - translate / translate_text: Pure translation of a node tree or YAML text.
  - IntermediateConfig / IntermediateRemoteMachine / IntermediateCompression:
    Immutable result models.
  - ConfigError and its subclasses: Structured failures.
"""

from .errors import (
    ConfigAccessError,
    ConfigError,
    ConfigFileError,
    ConfigReadError,
    DocumentSyntaxError,
    FieldTypeError,
    LevelRangeError,
    SectionShapeError,
    TranslationError,
)
from .loader import dump, load, locate
from .schema import IntermediateCompression, IntermediateConfig, IntermediateRemoteMachine
from .translator import translate, translate_text

__all__ = [
    "load",
    "locate",
    "dump",
    "translate",
    "translate_text",
    "IntermediateConfig",
    "IntermediateRemoteMachine",
    "IntermediateCompression",
    "ConfigError",
    "ConfigAccessError",
    "ConfigReadError",
    "ConfigFileError",
    "TranslationError",
    "DocumentSyntaxError",
    "SectionShapeError",
    "FieldTypeError",
    "LevelRangeError",
]
