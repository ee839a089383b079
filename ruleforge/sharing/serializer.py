"""
Configuration Serializer - Canonical JSON text for configurations and mods.

Export writes the wire documents from `schemas` with a stable key order
and two-space indentation. Import parses through the same documents, so
malformed JSON and missing required fields surface as
ConfigurationParseError.
"""

from __future__ import annotations
import json

from pydantic import ValidationError

from ..rule_schema import GameConfiguration, GameModification
from .schemas import ConfigurationDocument, ModificationDocument


class ConfigurationParseError(ValueError):
    """Raised when imported text is not a valid configuration or modification."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors or []
        super().__init__(message)


def _parse(text: str | bytes, kind: str) -> object:
    # json.loads also accepts the NaN and Infinity constants written on export
    try:
        return json.loads(text)
    except ValueError as e:
        raise ConfigurationParseError(f"Invalid {kind} data: {e}", [str(e)]) from e


def _describe(error: ValidationError) -> list[str]:
    described = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        described.append(f"{location}: {item['msg']}")
    return described


def dump_configuration(config: GameConfiguration) -> str:
    document = ConfigurationDocument.from_configuration(config)
    return json.dumps(document.to_wire(), indent=2, ensure_ascii=False)


def load_configuration(text: str | bytes) -> GameConfiguration:
    """
    Parse configuration text.

    The returned configuration still carries the exported game_id and
    timestamps; the engine replaces them when storing it.
    """
    try:
        document = ConfigurationDocument.model_validate(_parse(text, "configuration"))
    except ValidationError as e:
        errors = _describe(e)
        raise ConfigurationParseError(
            f"Invalid configuration data: {'; '.join(errors)}", errors
        ) from e
    return document.to_configuration()


def dump_modification(mod: GameModification) -> str:
    document = ModificationDocument.from_modification(mod)
    return json.dumps(document.to_wire(), indent=2, ensure_ascii=False)


def load_modification(text: str | bytes) -> GameModification:
    try:
        document = ModificationDocument.model_validate(_parse(text, "modification"))
    except ValidationError as e:
        errors = _describe(e)
        raise ConfigurationParseError(
            f"Invalid modification data: {'; '.join(errors)}", errors
        ) from e
    return document.to_modification()
