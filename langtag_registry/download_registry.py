"""Language Subtag Registry download module."""

import logging
import tempfile
from pathlib import Path
from typing import IO, Dict, Optional

import requests
import tqdm

from .exceptions import PathError
from .utils import (
    REGISTRY_FILENAME,
    get_cache_path,
    get_configured_registry_path,
    get_registry_url,
)

logger = logging.getLogger(__name__)


def http_get(
    url: str,
    out_file: IO[bytes],
    proxies: Optional[Dict[str, str]] = None,
) -> None:
    """
    Downloads a file from a given URL and writes it to the specified output file.

    :param url: The URL to download the file from.
    :type url: str
    :param out_file: The file object to write the downloaded content to.
    :type out_file: IO[bytes]
    :param proxies: Optional dictionary of proxies to use for the request.
    :type proxies: Optional[Dict[str, str]]
    :raises TimeoutError: If the request times out.
    :raises PathError: If the file could not be found at the given URL (HTTP 404).
    :raises requests.HTTPError: If the server answers with another error status.
    """
    logger.info("Starting download from %s", url)
    try:
        req = requests.get(url, stream=True, proxies=proxies, timeout=60)
    except requests.exceptions.Timeout as e:
        err = f"Request to {url} timed out."
        raise TimeoutError(err) from e
    if req.status_code == 404:
        err = f"Could not find the language subtag registry at URL {url}."
        raise PathError(err)
    req.raise_for_status()
    content_length = req.headers.get("Content-Length")
    total = int(content_length) if content_length is not None else None
    progress = tqdm.tqdm(
        unit="B",
        unit_scale=True,
        total=total,
        desc="Downloading language subtag registry",
    )
    for chunk in req.iter_content(chunk_size=1024):
        if chunk:  # filter out keep-alive new chunks
            progress.update(len(chunk))
            out_file.write(chunk)
    progress.close()


def download_registry(
    force: bool = False,
    proxies: Optional[Dict[str, str]] = None,
) -> Path:
    """
    Downloads the Language Subtag Registry into the cache directory.
    Nothing is downloaded when ``LANGTAG_REGISTRY_PATH`` names a registry
    file, or when a cached copy already exists and ``force`` is not set.

    :param force: Download again even if a cached copy exists.
    :type force: bool
    :param proxies: Optional dictionary of proxies to use for the request.
    :type proxies: Optional[Dict[str, str]]
    :raises PathError: If ``LANGTAG_REGISTRY_PATH`` names no file, or the
                       registry is not found at the download URL (HTTP 404).
    :raises TimeoutError: If the download request times out.
    :raises requests.HTTPError: If the server answers with another error status.
    :return: The path of the registry file to load.
    :rtype: Path
    """
    configured = get_configured_registry_path()
    if configured is not None:
        return configured

    cache_folder = get_cache_path()
    target = cache_folder / REGISTRY_FILENAME
    if target.is_file() and not force:
        logger.debug("Registry already cached at %s", target)
        return target

    temp_path: Optional[Path] = None
    try:
        # Same directory as the target, for the rename below
        with tempfile.NamedTemporaryFile(
            dir=cache_folder,
            suffix=".part",
            delete=False,
        ) as downloaded_file:
            temp_path = Path(downloaded_file.name)
            http_get(get_registry_url(), downloaded_file, proxies=proxies)
        temp_path.replace(target)
    finally:
        # Already moved on success; removes the partial file otherwise.
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
    logger.info("Saved language subtag registry to %s", target)
    return target
