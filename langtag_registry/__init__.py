"""BCP-47 language tag descriptions and normalization from the IANA Language Subtag Registry."""

__all__ = [
    "Language",
    "LanguageCatalog",
    "Region",
    "RegistryIndex",
    "Script",
    "Variant",
    "describe",
    "exceptions",
    "file_date",
    "get_default_index",
    "load",
    "loads",
    "normalize",
    "resolve",
]

__version__ = "1.0.0"

import logging

from . import exceptions
from .languages import LanguageCatalog, get_default_index
from .records import Language, Region, Script, Variant
from .registry_parser import RegistryIndex, load, loads
from .resolver import describe, file_date, normalize, resolve

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())
