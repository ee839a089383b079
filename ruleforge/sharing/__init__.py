"""
Sharing - Export/import of configurations and portable modifications.

Configurations travel as canonical JSON text; modifications are the
diff-style bundle users publish and apply onto fresh configurations.
"""

from .serializer import (
    ConfigurationParseError,
    dump_configuration,
    load_configuration,
    dump_modification,
    load_modification,
)
from .mods import create_modification, apply_modification
from .schemas import ConfigurationDocument, ModificationDocument, AssetDocument

__all__ = [
    "ConfigurationParseError",
    "dump_configuration",
    "load_configuration",
    "dump_modification",
    "load_modification",
    "create_modification",
    "apply_modification",
    "ConfigurationDocument",
    "ModificationDocument",
    "AssetDocument",
]
