"""Language lookup combining curated display lists with the subtag registry."""

import functools
import logging
import unicodedata
from typing import Iterable, List, Optional

from .download_registry import download_registry
from .records import Language
from .registry_parser import RegistryIndex, load
from .resolver import PRIVATE_USE_LABEL, describe, normalize

logger = logging.getLogger(__name__)

CJK_PREFIXES = ("zh", "ja", "ko", "vi", "ain", "aib")


@functools.lru_cache(maxsize=None)
def get_default_index() -> RegistryIndex:
    """
    Get the process-wide registry index, loading it on first use.
    The registry is read from ``LANGTAG_REGISTRY_PATH`` when it is set,
    otherwise from the download cache, which is filled on first use.

    :raises RegistryError: If the registry file cannot be loaded.
    :raises PathError: If ``LANGTAG_REGISTRY_PATH`` names no file, or the
                       registry is not found at the download URL (HTTP 404).
    :raises TimeoutError: If the download request times out.
    :raises requests.HTTPError: If the server answers with another error status.
    :return: The shared registry index.
    :rtype: RegistryIndex
    """
    return load(download_registry())


def is_cjk(code: str) -> bool:
    """
    Check whether a code names a Chinese, Japanese, Korean or Vietnamese
    language (or Ainu).

    :param code: The language tag.
    :type code: str
    :return: True if the tag starts with one of the CJK language codes.
    :rtype: bool
    """
    return code.startswith(CJK_PREFIXES)


def display_sort_key(description: str) -> str:
    """
    Key for sorting descriptions for display, ignoring case and accents.

    :param description: The description to sort.
    :type description: str
    :return: The comparison key.
    :rtype: str
    """
    decomposed = unicodedata.normalize("NFKD", description)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


class LanguageCatalog:
    """
    Looks languages up in curated display-name lists first, and falls back to
    the Language Subtag Registry for codes the lists do not contain.

    :param common: The short list of commonly used languages.
    :type common: Iterable[Language]
    :param extended: The full curated list of languages.
    :type extended: Iterable[Language]
    :param bidi_codes: Codes of the curated languages written right to left.
    :type bidi_codes: Iterable[str]
    :param index: The registry index; the process-wide one is loaded on first
                  use if omitted.
    :type index: Optional[RegistryIndex]
    :param private_use_label: The text shown for private-use subtags.
    :type private_use_label: str
    """

    def __init__(
        self,
        common: Iterable[Language] = (),
        extended: Iterable[Language] = (),
        bidi_codes: Iterable[str] = (),
        index: Optional[RegistryIndex] = None,
        private_use_label: str = PRIVATE_USE_LABEL,
    ) -> None:
        self._common = sorted(common, key=lambda lang: display_sort_key(lang.description))
        self._extended = sorted(
            extended, key=lambda lang: display_sort_key(lang.description)
        )
        self._bidi_codes = frozenset(bidi_codes)
        self._index = index
        self.private_use_label = private_use_label

    def __repr__(self) -> str:
        return (
            f"<LanguageCatalog common={len(self._common)} "
            f"extended={len(self._extended)}>"
        )

    @property
    def index(self) -> RegistryIndex:
        """The registry index used for codes missing from the curated lists."""
        if self._index is None:
            self._index = get_default_index()
        return self._index

    def common_languages(self) -> List[Language]:
        """
        Get the common languages, sorted by description.

        :return: A copy of the common list.
        :rtype: List[Language]
        """
        return list(self._common)

    def all_languages(self) -> List[Language]:
        """
        Get the extended list of languages, sorted by description.

        :return: A copy of the extended list.
        :rtype: List[Language]
        """
        return list(self._extended)

    def language_names(self) -> List[str]:
        """
        Get the descriptions of the common languages, in display order.

        :return: The descriptions.
        :rtype: List[str]
        """
        return [lang.description for lang in self._common]

    def get_language(self, code: str) -> Optional[Language]:
        """
        Find a language by code.
        The extended list is searched for an exact match first; otherwise the
        code is described from the registry.

        :param code: The language tag, e.g. ``pt-BR`` or ``qaa``.
        :type code: str
        :return: The language, or None if neither source knows the code.
        :rtype: Optional[Language]
        """
        for lang in self._extended:
            if lang.code == code:
                return lang
        description = describe(self.index, code, self.private_use_label)
        if not description:
            logger.debug("No description for %r", code)
            return None
        return Language(code, description)

    def language_from_name(self, description: str) -> Optional[Language]:
        """
        Find a curated language by its exact description.

        :param description: The description, e.g. ``Portuguese (Brazil)``.
        :type description: str
        :return: The language, or None if no curated entry has that description.
        :rtype: Optional[Language]
        """
        for lang in self._extended:
            if lang.description == description:
                return lang
        return None

    def normalize_code(self, code: str) -> str:
        """
        Normalize a tag against the registry.

        :param code: The tag to normalize.
        :type code: str
        :return: The normalized tag, or an empty string if it is not matched.
        :rtype: str
        """
        return normalize(self.index, code)

    def is_bidi(self, code: str) -> bool:
        """
        Check whether a curated language is written right to left.

        :param code: The language code.
        :type code: str
        :return: True if the code is in the curated right-to-left set.
        :rtype: bool
        """
        return code in self._bidi_codes
