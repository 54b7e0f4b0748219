"""Utility functions for the langtag_registry library."""

import logging
import os
from pathlib import Path
from typing import Optional

from .exceptions import PathError

logger = logging.getLogger(__name__)

REGISTRY_FILENAME = "language-subtag-registry.txt"
REGISTRY_URL = (
    "https://www.iana.org/assignments/language-subtag-registry/language-subtag-registry"
)

# Explicit registry file; when set, nothing is downloaded:
LANGTAG_REGISTRY_PATH_ENV_VAR = "LANGTAG_REGISTRY_PATH"

LANGTAG_CACHE_PATH_ENV_VAR = "LANGTAG_CACHE_PATH"  # Download cache directory

LANGTAG_REGISTRY_URL_ENV_VAR = "LANGTAG_REGISTRY_URL"


def get_registry_url() -> str:
    """
    Get the URL the registry is downloaded from.

    :return: The value of ``LANGTAG_REGISTRY_URL`` if set, else the IANA URL.
    :rtype: str
    """
    return os.environ.get(LANGTAG_REGISTRY_URL_ENV_VAR, REGISTRY_URL)


def get_configured_registry_path() -> Optional[Path]:
    """
    Get the registry file named by ``LANGTAG_REGISTRY_PATH``, if any.

    :raises PathError: If the variable is set but does not name a file.
    :return: The configured path, or None if the variable is unset.
    :rtype: Optional[Path]
    """
    path_str = os.environ.get(LANGTAG_REGISTRY_PATH_ENV_VAR)
    if not path_str:
        return None
    path = Path(path_str)
    if not path.is_file():
        err = f"{LANGTAG_REGISTRY_PATH_ENV_VAR} is not a file: {path}"
        raise PathError(err)
    logger.debug("Using registry from %s: %s", LANGTAG_REGISTRY_PATH_ENV_VAR, path)
    return path


def get_cache_path() -> Path:
    """
    Get the directory the downloaded registry is cached in.
    This function retrieves the path from the environment variable specified
    by ``LANGTAG_CACHE_PATH_ENV_VAR``. If the environment variable is not set,
    it defaults to ``.cache/langtag_registry`` in the user's home directory.
    The directory is created if it does not exist.

    :return: The cache directory.
    :rtype: Path
    """
    path_str = os.environ.get(
        LANGTAG_CACHE_PATH_ENV_VAR,
        str(Path.home() / ".cache" / "langtag_registry"),
    )
    path = Path(path_str)
    path.mkdir(parents=True, exist_ok=True)
    return path
