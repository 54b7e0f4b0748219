"""Immutable records for resolved registry subtags."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Language:
    """
    A language subtag and its display description.

    Curated display-name lists use the same record, in which case
    ``suppressed_script`` is left unset.
    """

    code: str
    """The language code (lower-case for registry entries)."""

    description: str
    """The canonical description of the language."""

    suppressed_script: Optional[str] = None
    """The script that is implied by the language and omitted from tags."""


@dataclass(frozen=True)
class Region:
    """A region subtag: a 2-letter ISO 3166 code or a 3-digit UN M.49 code."""

    code: str
    """The region code as registered."""

    description: str
    """The description of the region."""


@dataclass(frozen=True)
class Script:
    """A 4-letter ISO 15924 script subtag."""

    code: str
    """The title-cased script code (e.g. ``Hant``)."""

    description: str
    """The description, with parentheses rewritten to square brackets."""


@dataclass(frozen=True)
class Variant:
    """A variant subtag, only valid after the language it is registered for."""

    code: str
    """The lower-case variant code."""

    description: str
    """The description, with parentheses rewritten to square brackets."""

    prefix: Optional[str] = None
    """The first registered prefix, or None if the variant declares none."""


@dataclass(frozen=True)
class SubtagRange:
    """
    An inclusive lexicographic range of private-use subtags, such as
    ``qaa..qtz``.

    Membership is a plain string comparison. Callers fold the candidate to the
    same case as the bounds before testing it.
    """

    start: str
    """The lower bound of the range."""

    end: str
    """The upper bound of the range."""

    def contains(self, code: str) -> bool:
        """
        Check whether a subtag falls inside the range.

        :param code: The subtag, already case-folded like the bounds.
        :type code: str
        :return: True if ``start <= code <= end``, False otherwise.
        :rtype: bool
        """
        return self.start <= code <= self.end

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"
