"""Shared fixtures for the langtag_registry tests."""

from pathlib import Path
from typing import Generator

import pytest

from langtag_registry.languages import get_default_index
from langtag_registry.registry_parser import RegistryIndex, load
from langtag_registry.utils import (
    LANGTAG_CACHE_PATH_ENV_VAR,
    LANGTAG_REGISTRY_PATH_ENV_VAR,
    LANGTAG_REGISTRY_URL_ENV_VAR,
)

REGISTRY_PATH = Path(__file__).parent / "data" / "language-subtag-registry.txt"


@pytest.fixture(scope="session")  # type: ignore[misc]
def registry_path() -> Path:
    """
    Path of the registry excerpt used by the tests.

    :return: The path of ``tests/data/language-subtag-registry.txt``.
    :rtype: Path
    """
    return REGISTRY_PATH


@pytest.fixture(scope="session")  # type: ignore[misc]
def index(registry_path: Path) -> RegistryIndex:
    """
    The registry excerpt, loaded once per test session.

    :param registry_path: The registry excerpt path.
    :return: The loaded index.
    :rtype: RegistryIndex
    """
    return load(registry_path)


@pytest.fixture(autouse=True)  # type: ignore[misc]
def isolated_environment(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> Generator[None, None, None]:
    """
    Keep tests away from the user's cache and environment, and from any index
    loaded by an earlier test.

    :param monkeypatch: Pytest fixture for patching the environment.
    :param tmp_path: Pytest fixture providing a temporary directory.
    """
    monkeypatch.delenv(LANGTAG_REGISTRY_PATH_ENV_VAR, raising=False)
    monkeypatch.delenv(LANGTAG_REGISTRY_URL_ENV_VAR, raising=False)
    monkeypatch.setenv(LANGTAG_CACHE_PATH_ENV_VAR, str(tmp_path / "cache"))
    get_default_index.cache_clear()
    yield
    get_default_index.cache_clear()
