"""IANA Language Subtag Registry loading module."""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import IO, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .exceptions import RegistryError
from .records import Language, Region, Script, SubtagRange, Variant

logger = logging.getLogger(__name__)

RECORD_SEPARATOR = "%%"
CONTINUATION = "  "
DESCRIPTION_SEPARATOR = " | "

# Spans from the first "(" to the last ")"
_QUALIFIER_RE = re.compile(r"\(.*\)")

Source = Union[str, "os.PathLike[str]", bytes, IO[str], IO[bytes]]


def title_case(code: str) -> str:
    """
    Fold a script subtag to its registered case: first letter upper-cased,
    the rest lower-cased (``hANT`` -> ``Hant``).

    :param code: The subtag to fold.
    :type code: str
    :return: The title-cased subtag.
    :rtype: str
    """
    return code[:1].upper() + code[1:].lower()


class RegistryRecord:
    """
    One ``%%``-delimited record of the registry, as a mapping from field name
    to the list of values it carries. Fields such as ``Description``,
    ``Prefix`` and ``Comments`` may repeat.

    :param fields: Field names mapped to their values, in source order.
    :type fields: Dict[str, List[str]]
    """

    def __init__(self, fields: Dict[str, List[str]]) -> None:
        self._fields = fields

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __repr__(self) -> str:
        return f"<RegistryRecord {self.type}:{self.subtag}>"

    @property
    def fields(self) -> List[str]:
        """The names of the fields present in this record."""
        return list(self._fields)

    def get(self, name: str) -> Optional[str]:
        """
        Return the first value of a field.

        :param name: The field name, e.g. ``Prefix``.
        :type name: str
        :return: The first value, or None if the field is absent.
        :rtype: Optional[str]
        """
        values = self._fields.get(name)
        return values[0] if values else None

    @property
    def type(self) -> Optional[str]:
        """The record ``Type`` (language, region, script, variant, ...)."""
        return self.get("Type")

    @property
    def subtag(self) -> Optional[str]:
        """The record ``Subtag``, or None for tags and the file header."""
        return self.get("Subtag")

    @property
    def description(self) -> Optional[str]:
        """All ``Description`` values joined with `` | ``."""
        values = self._fields.get("Description")
        if not values:
            return None
        return DESCRIPTION_SEPARATOR.join(values)


@dataclass(frozen=True)
class RegistryIndex:
    """
    The typed lookup tables built from the registry. Instances are immutable:
    the tables are read-only mappings and can be shared between threads.
    """

    languages: Mapping[str, Language] = field(default_factory=dict)
    """Language entries keyed by lower-case subtag."""

    regions: Mapping[str, Region] = field(default_factory=dict)
    """Region entries keyed by upper-case subtag (UN codes are numeric)."""

    scripts: Mapping[str, Script] = field(default_factory=dict)
    """Script entries keyed by title-cased subtag."""

    variants: Mapping[str, Variant] = field(default_factory=dict)
    """Variant entries keyed by lower-case subtag."""

    private_languages: Optional[SubtagRange] = None
    """The private-use language range, with lower-case bounds."""

    private_scripts: Optional[SubtagRange] = None
    """The private-use script range, with title-cased bounds."""

    private_regions: Tuple[SubtagRange, ...] = ()
    """The private-use region ranges, with upper-case bounds."""

    file_date: Optional[str] = None
    """The registry's ``File-Date`` header."""

    def is_private_language(self, code: str) -> bool:
        """
        Check whether a code falls in the private-use language range.

        :param code: The language subtag, in any case.
        :type code: str
        :return: True if the lower-cased code is inside the range.
        :rtype: bool
        """
        if self.private_languages is None:
            return False
        return self.private_languages.contains(code.lower())

    def is_private_script(self, code: str) -> bool:
        """
        Check whether a code falls in the private-use script range.

        :param code: The script subtag, in any case.
        :type code: str
        :return: True if the title-cased code is inside the range.
        :rtype: bool
        """
        if self.private_scripts is None:
            return False
        return self.private_scripts.contains(title_case(code))

    def is_private_region(self, code: str) -> bool:
        """
        Check whether a code falls in any of the private-use region ranges.

        :param code: The region subtag, in any case.
        :type code: str
        :return: True if the upper-cased code is inside one of the ranges.
        :rtype: bool
        """
        upper = code.upper()
        return any(r.contains(upper) for r in self.private_regions)


def iter_records(lines: Iterable[str]) -> Iterator[RegistryRecord]:
    """
    Split registry text into records.

    Lines are accumulated until a ``%%`` separator line. A line starting with
    two spaces continues the previous field and is folded onto it with a
    single space. The block following the last separator is a record too.

    :param lines: The registry text, line by line.
    :type lines: Iterable[str]
    :raises RegistryError: If a line is neither a continuation nor a
                           ``Field: value`` pair.
    :return: An iterator over the parsed records.
    :rtype: Iterator[RegistryRecord]
    """
    buffer: List[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if line.strip() == RECORD_SEPARATOR:
            yield _parse_record(buffer)
            buffer = []
        elif line.startswith(CONTINUATION) and buffer:
            buffer[-1] += " " + line.strip()
        elif line.strip():
            buffer.append(line)
    if buffer:
        yield _parse_record(buffer)


def _parse_record(lines: List[str]) -> RegistryRecord:
    """
    Parse the logical lines of one record into a ``RegistryRecord``.

    :param lines: The folded ``Field: value`` lines.
    :type lines: List[str]
    :raises RegistryError: If a line has no field name separator.
    :return: The record.
    :rtype: RegistryRecord
    """
    fields: Dict[str, List[str]] = {}
    for line in lines:
        name, sep, value = line.partition(":")
        if not sep:
            err = f"malformed registry line: {line!r}"
            raise RegistryError(err)
        fields.setdefault(name.strip(), []).append(value.strip())
    return RegistryRecord(fields)


def _split_range(subtag: str) -> Optional[Tuple[str, str]]:
    """
    Split a ``start..end`` subtag into its bounds.

    :param subtag: The range subtag, e.g. ``QM..QZ``.
    :type subtag: str
    :return: The bounds, or None if the subtag is not a well-formed range.
    :rtype: Optional[Tuple[str, str]]
    """
    start, _, end = subtag.partition("..")
    if not start or not end or ".." in end:
        return None
    return start, end


def _bracket(description: str) -> str:
    return description.replace("(", "[").replace(")", "]").strip()


def _language_description(subtag: str, description: str) -> str:
    """
    Reduce a registry language description to its display form.

    Only the first of several names is kept, the ``el`` entry is shown as
    "Greek" instead of "Modern Greek (1453-)", and any parenthetical
    qualifier is removed.

    :param subtag: The language subtag.
    :type subtag: str
    :param description: The raw (possibly multi-valued) description.
    :type description: str
    :return: The display description.
    :rtype: str
    """
    if "|" in description:
        description = description.split("|", 1)[0].strip()
    if subtag == "el":
        description = "Greek"
    return _QUALIFIER_RE.sub("", description).strip()


def build_index(records: Iterable[RegistryRecord]) -> RegistryIndex:
    """
    Fold parsed records into a ``RegistryIndex``.

    :param records: The records of one registry file.
    :type records: Iterable[RegistryRecord]
    :raises RegistryError: If the source contains no typed subtag records.
    :return: The immutable index.
    :rtype: RegistryIndex
    """
    languages: Dict[str, Language] = {}
    regions: Dict[str, Region] = {}
    scripts: Dict[str, Script] = {}
    variants: Dict[str, Variant] = {}
    private_languages: Optional[SubtagRange] = None
    private_scripts: Optional[SubtagRange] = None
    private_regions: List[SubtagRange] = []
    file_date: Optional[str] = None
    typed_records = 0

    for record in records:
        if file_date is None and "File-Date" in record:
            file_date = record.get("File-Date")
        record_type = record.type
        if record_type is None:
            continue
        typed_records += 1
        subtag = record.subtag
        if subtag is None:
            # grandfathered and redundant tags carry "Tag" instead
            continue
        description = record.description or ""

        if record_type == "language":
            if ".." in subtag:
                bounds = _split_range(subtag)
                if bounds is not None:
                    private_languages = SubtagRange(bounds[0].lower(), bounds[1].lower())
                    logger.debug("Private-use language range: %s", private_languages)
                continue
            code = subtag.lower()
            languages[code] = Language(
                code,
                _language_description(code, description),
                record.get("Suppress-Script"),
            )
        elif record_type == "region":
            if ".." in subtag:
                bounds = _split_range(subtag)
                if bounds is not None:
                    private_regions.append(
                        SubtagRange(bounds[0].upper(), bounds[1].upper())
                    )
                    logger.debug("Private-use region range: %s", private_regions[-1])
                continue
            code = subtag.upper()
            regions[code] = Region(code, description.strip())
        elif record_type == "script":
            if ".." in subtag:
                bounds = _split_range(subtag)
                if bounds is not None:
                    private_scripts = SubtagRange(
                        title_case(bounds[0]), title_case(bounds[1])
                    )
                    logger.debug("Private-use script range: %s", private_scripts)
                continue
            code = title_case(subtag)
            scripts[code] = Script(code, _bracket(description))
        elif record_type == "variant":
            code = subtag.lower()
            variants[code] = Variant(code, _bracket(description), record.get("Prefix"))

    if not typed_records:
        err = "no subtag records found in registry source"
        raise RegistryError(err)

    logger.info(
        "Loaded registry %s: %d languages, %d regions, %d scripts, %d variants",
        file_date,
        len(languages),
        len(regions),
        len(scripts),
        len(variants),
    )
    return RegistryIndex(
        languages=MappingProxyType(languages),
        regions=MappingProxyType(regions),
        scripts=MappingProxyType(scripts),
        variants=MappingProxyType(variants),
        private_languages=private_languages,
        private_scripts=private_scripts,
        private_regions=tuple(private_regions),
        file_date=file_date,
    )


def _decode_lines(stream: Union[IO[str], IO[bytes]]) -> Iterator[str]:
    for line in stream:
        if isinstance(line, bytes):
            yield line.decode("utf-8")
        else:
            yield line


def loads(text: str) -> RegistryIndex:
    """
    Build a ``RegistryIndex`` from registry text.

    :param text: The full registry text.
    :type text: str
    :raises RegistryError: If the text is not in the registry format.
    :return: The immutable index.
    :rtype: RegistryIndex
    """
    return build_index(iter_records(text.splitlines()))


def load(source: Source) -> RegistryIndex:
    """
    Load the Language Subtag Registry.

    :param source: A path to the registry file, an open (text or binary) file
                   object, or the raw UTF-8 bytes of the registry.
    :type source: Union[str, os.PathLike, bytes, IO[str], IO[bytes]]
    :raises RegistryError: If the source cannot be read, is not valid UTF-8 or
                           is not in the registry format.
    :return: The immutable index.
    :rtype: RegistryIndex
    """
    if isinstance(source, bytes):
        try:
            text = source.decode("utf-8")
        except UnicodeDecodeError as e:
            err = f"registry source is not valid UTF-8: {e}"
            raise RegistryError(err) from e
        return loads(text)

    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        logger.info("Loading language subtag registry from %s", path)
        try:
            with open(path, encoding="utf-8") as f:
                return build_index(iter_records(f))
        except (OSError, UnicodeDecodeError) as e:
            err = f"could not read registry {str(path)!r}: {e}"
            raise RegistryError(err) from e

    try:
        return build_index(iter_records(_decode_lines(source)))
    except (OSError, UnicodeDecodeError) as e:
        err = f"could not read registry stream: {e}"
        raise RegistryError(err) from e
