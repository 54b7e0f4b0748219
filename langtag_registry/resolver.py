"""BCP-47 tag description and normalization module."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .records import Language
from .registry_parser import RegistryIndex, title_case

logger = logging.getLogger(__name__)

PRIVATE_USE_LABEL = "Private use"

MAX_SUBTAGS = 3


class SubtagShape(Enum):
    """The role a subtag can play after the language, judged by its length."""

    REGION = "region"
    SCRIPT = "script"
    OTHER = "other"


class ComponentKind(Enum):
    LANGUAGE = "language"
    REGION = "region"
    SCRIPT = "script"
    VARIANT = "variant"


def classify_subtag(part: str) -> SubtagShape:
    """
    Classify a subtag by its length: 2 or 3 characters look like a region
    (ISO 3166 or UN M.49), 4 like a script, anything else can only be a
    variant.

    :param part: The subtag.
    :type part: str
    :return: The shape of the subtag.
    :rtype: SubtagShape
    """
    if len(part) in (2, 3):
        return SubtagShape.REGION
    if len(part) == 4:
        return SubtagShape.SCRIPT
    return SubtagShape.OTHER


@dataclass(frozen=True)
class Component:
    """A resolved subtag of a tag."""

    kind: ComponentKind
    """Which registry table the subtag was resolved against."""

    code: str
    """The canonical form of the subtag."""

    description: Optional[str]
    """The registry description, or None for a private-use subtag."""


@dataclass(frozen=True)
class Resolution:
    """
    The outcome of matching a tag against the registry: the language and
    the subtags qualifying it, in tag order.
    """

    language: Component
    """The language component."""

    qualifiers: Tuple[Component, ...] = ()
    """Script, region and variant components following the language."""

    separator: str = ", "
    """How the qualifier descriptions are joined inside the parentheses."""

    @property
    def codes(self) -> List[str]:
        """The canonical subtags, language first."""
        return [self.language.code] + [q.code for q in self.qualifiers]


def _region(index: RegistryIndex, part: str) -> Optional[Component]:
    entry = index.regions.get(part.upper())
    if entry is not None:
        return Component(ComponentKind.REGION, entry.code, entry.description)
    if index.is_private_region(part):
        return Component(ComponentKind.REGION, part.upper(), None)
    return None


def _un_region(index: RegistryIndex, part: str) -> Optional[Component]:
    # UN M.49 codes are numeric and have no private-use range
    entry = index.regions.get(part)
    if entry is None:
        return None
    return Component(ComponentKind.REGION, entry.code, entry.description)


def _script(index: RegistryIndex, code: str) -> Optional[Component]:
    entry = index.scripts.get(code)
    if entry is not None:
        return Component(ComponentKind.SCRIPT, entry.code, entry.description)
    if index.is_private_script(code):
        return Component(ComponentKind.SCRIPT, code, None)
    return None


def _variant(
    index: RegistryIndex,
    part: str,
    language: Optional[Language],
) -> Optional[Component]:
    """
    Look up a variant that is registered for the given language.

    :param index: The registry index.
    :type index: RegistryIndex
    :param part: The candidate variant subtag.
    :type part: str
    :param language: The registered language, or None for a private-use one.
    :type language: Optional[Language]
    :return: The variant component, or None if the variant is unknown or its
             prefix names another language.
    :rtype: Optional[Component]
    """
    if language is None:
        return None
    entry = index.variants.get(part.lower())
    if entry is None or entry.prefix != language.code:
        return None
    return Component(ComponentKind.VARIANT, entry.code, entry.description)


def _is_suppressed(language: Optional[Language], script: str) -> bool:
    return language is not None and script == language.suppressed_script


def _resolve_pair(
    index: RegistryIndex,
    component: Component,
    language: Optional[Language],
    part: str,
) -> Optional[Resolution]:
    shape = classify_subtag(part)
    if shape is SubtagShape.REGION:
        region = _region(index, part) if len(part) == 2 else _un_region(index, part)
        if region is not None:
            return Resolution(component, (region,))
    elif shape is SubtagShape.SCRIPT:
        code = title_case(part)
        if _is_suppressed(language, code):
            logger.debug("Script %s is suppressed for %s", code, component.code)
            return None
        script = _script(index, code)
        if script is not None:
            return Resolution(component, (script,))

    # 4-letter variants such as "1996" land here too
    variant = _variant(index, part, language)
    if variant is not None:
        return Resolution(component, (variant,))
    if language is None:
        return Resolution(component)
    return None


def _resolve_triple(
    index: RegistryIndex,
    component: Component,
    language: Optional[Language],
    first: str,
    second: str,
) -> Optional[Resolution]:
    shape = classify_subtag(first)
    if shape is SubtagShape.SCRIPT:
        code = title_case(first)
        if _is_suppressed(language, code):
            logger.debug("Script %s is suppressed for %s", code, component.code)
            return None
        script = _script(index, code)
        if script is None:
            return None
        region = _region(index, second)
        if region is not None:
            return Resolution(component, (script, region))
        variant = _variant(index, second, language)
        if variant is not None:
            return Resolution(component, (script, variant))
        return None

    if shape is SubtagShape.REGION:
        region = _region(index, first)
        if region is None:
            return None
        variant = _variant(index, second, language)
        if variant is not None:
            return Resolution(component, (region, variant), " - ")
        # TODO: decide whether a variant after a private-use language and
        # region should be reported instead of dropped.
        if language is None:
            return Resolution(component, (region,))
    return None


def resolve(index: RegistryIndex, tag: str) -> Optional[Resolution]:
    """
    Match a tag of one to three subtags against the registry.

    The second subtag is read as a region, script or variant according to its
    length; a three-subtag tag is either script + region, script + variant or
    region + variant. A private-use language is accepted, but since no variant
    is registered for it, only its region or script qualifies it.

    :param index: The registry index.
    :type index: RegistryIndex
    :param tag: The hyphen-delimited tag, e.g. ``zh-Hant-TW``.
    :type tag: str
    :return: The resolution, or None if the tag matches no known pattern.
    :rtype: Optional[Resolution]
    """
    parts = tag.split("-")
    if len(parts) > MAX_SUBTAGS:
        logger.debug("Tag %r has more than %d subtags", tag, MAX_SUBTAGS)
        return None

    code = parts[0].lower()
    language = index.languages.get(code)
    if language is not None:
        component = Component(ComponentKind.LANGUAGE, language.code, language.description)
    elif index.is_private_language(code):
        component = Component(ComponentKind.LANGUAGE, code, None)
    else:
        logger.debug("Unknown language subtag in %r", tag)
        return None

    if len(parts) == 1:
        return Resolution(component)
    if len(parts) == 2:
        return _resolve_pair(index, component, language, parts[1])
    return _resolve_triple(index, component, language, parts[1], parts[2])


def describe(
    index: RegistryIndex,
    tag: str,
    private_use_label: str = PRIVATE_USE_LABEL,
) -> str:
    """
    Describe a tag in words, e.g. ``sr-Latn`` -> ``Serbian (Latin)``.

    :param index: The registry index.
    :type index: RegistryIndex
    :param tag: The tag to describe.
    :type tag: str
    :param private_use_label: The text shown for private-use subtags.
    :type private_use_label: str
    :return: The description, or an empty string if the tag is not matched.
    :rtype: str
    """
    resolution = resolve(index, tag)
    if resolution is None:
        return ""

    def text(component: Component) -> str:
        if component.description is None:
            return private_use_label
        return component.description

    result = text(resolution.language)
    if resolution.qualifiers:
        qualifiers = resolution.separator.join(text(q) for q in resolution.qualifiers)
        result += f" ({qualifiers})"
    return result


def normalize(index: RegistryIndex, tag: str) -> str:
    """
    Rewrite a tag in canonical case, e.g. ``ZH-hant-tw`` -> ``zh-Hant-TW``.

    :param index: The registry index.
    :type index: RegistryIndex
    :param tag: The tag to normalize.
    :type tag: str
    :return: The normalized tag, or an empty string if the tag is not matched.
    :rtype: str
    """
    resolution = resolve(index, tag)
    if resolution is None:
        return ""
    return "-".join(resolution.codes)


def file_date(index: RegistryIndex) -> Optional[str]:
    """
    Return the ``File-Date`` of the registry the index was built from.

    :param index: The registry index.
    :type index: RegistryIndex
    :return: The date as written in the registry (``YYYY-MM-DD``), if any.
    :rtype: Optional[str]
    """
    return index.file_date
