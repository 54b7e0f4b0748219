"""Tests for loading the Language Subtag Registry."""

import io
from pathlib import Path

import pytest

from langtag_registry.exceptions import RegistryError
from langtag_registry.records import Language, Region, Script, SubtagRange, Variant
from langtag_registry.registry_parser import (
    RegistryIndex,
    iter_records,
    load,
    loads,
    title_case,
)


def test_language_entries(index: RegistryIndex) -> None:
    """
    Test that language descriptions keep only the first name, lose their
    parenthetical qualifiers, and carry the suppressed script.

    :raises AssertionError: If a language entry differs from the expected one.
    """
    assert index.languages["en"] == Language("en", "English", "Latn")
    assert index.languages["es"].description == "Spanish"
    assert index.languages["ca"].description == "Catalan"
    assert index.languages["nl"].description == "Dutch"
    assert index.languages["grc"] == Language("grc", "Ancient Greek", None)
    assert index.languages["zh"].suppressed_script is None


def test_greek_is_renamed(index: RegistryIndex) -> None:
    """
    Test that ``el`` is described as "Greek" rather than "Modern Greek (1453-)".

    :raises AssertionError: If the description of ``el`` is not "Greek".
    """
    assert index.languages["el"] == Language("el", "Greek", "Grek")


def test_region_script_variant_entries(index: RegistryIndex) -> None:
    """
    Test the region, script and variant tables, including the bracket rewrite
    of script and variant descriptions and the first-prefix rule.

    :raises AssertionError: If an entry differs from the expected one.
    """
    assert index.regions["US"] == Region("US", "United States")
    assert index.regions["419"] == Region("419", "Latin America and the Caribbean")
    assert index.scripts["Hant"] == Script("Hant", "Han [Traditional variant]")
    assert index.variants["1996"] == Variant("1996", "German orthography of 1996", "de")
    assert index.variants["pinyin"].prefix == "zh-Latn"
    assert index.variants["alalc97"].prefix is None
    # description wrapped over two lines in the source
    assert index.variants["valencia"].description == "Valencian [Catalan variety]"


def test_private_use_ranges(index: RegistryIndex) -> None:
    """
    Test that ``..`` subtags become private-use ranges instead of entries.

    :raises AssertionError: If the ranges are not recorded as expected.
    """
    assert index.private_languages == SubtagRange("qaa", "qtz")
    assert index.private_scripts == SubtagRange("Qaaa", "Qabx")
    assert index.private_regions == (SubtagRange("QM", "QZ"), SubtagRange("XA", "XZ"))
    assert "qaa..qtz" not in index.languages
    assert "QM..QZ" not in index.regions


@pytest.mark.parametrize(  # type: ignore[misc]
    "code, expected",
    [
        ("qaa", True),
        ("QTZ", True),
        ("qbc", True),
        ("qua", False),
        ("aaaa", False),
        ("", False),
    ],
)
def test_is_private_language(index: RegistryIndex, code: str, expected: bool) -> None:
    """
    Test the private-use language range check, which ignores case.

    :param code: The language code to test.
    :param expected: Whether the code is expected to be private use.
    :raises AssertionError: If the range check gives the wrong answer.
    """
    assert index.is_private_language(code) is expected


@pytest.mark.parametrize(  # type: ignore[misc]
    "code, expected",
    [
        ("Qaaa", True),
        ("qABX", True),
        ("Qaby", False),
        ("Latn", False),
    ],
)
def test_is_private_script(index: RegistryIndex, code: str, expected: bool) -> None:
    """
    Test the private-use script range check, which compares title-cased codes.

    :param code: The script code to test.
    :param expected: Whether the code is expected to be private use.
    :raises AssertionError: If the range check gives the wrong answer.
    """
    assert index.is_private_script(code) is expected


@pytest.mark.parametrize(  # type: ignore[misc]
    "code, expected",
    [("qm", True), ("QZ", True), ("xk", True), ("QL", False), ("YA", False)],
)
def test_is_private_region(index: RegistryIndex, code: str, expected: bool) -> None:
    """
    Test the private-use region check against both region ranges.

    :param code: The region code to test.
    :param expected: Whether the code is expected to be private use.
    :raises AssertionError: If the range check gives the wrong answer.
    """
    assert index.is_private_region(code) is expected


def test_file_date(index: RegistryIndex) -> None:
    """
    Test that the ``File-Date`` header is kept.

    :raises AssertionError: If the file date is not the one in the excerpt.
    """
    assert index.file_date == "2024-11-19"


def test_index_is_read_only(index: RegistryIndex) -> None:
    """
    Test that the tables of a loaded index cannot be modified.

    :raises AssertionError: If a table accepts an assignment.
    """
    with pytest.raises(TypeError):
        index.languages["xx"] = Language("xx", "Test")  # type: ignore[index]
    with pytest.raises(AttributeError):
        index.file_date = "2000-01-01"  # type: ignore[misc]


def test_iter_records_folds_continuation_lines() -> None:
    """
    Test that continuation lines are folded, repeated fields are kept in
    order, and the block after the last separator is a record.

    :raises AssertionError: If the records are not split as expected.
    """
    text = (
        "File-Date: 2024-11-19\n"
        "%%\n"
        "Type: variant\n"
        "Subtag: pinyin\n"
        "Description: Pinyin\n"
        "  romanization\n"
        "Prefix: zh-Latn\n"
        "Prefix: bo-Latn\n"
        "%%\n"
        "Type: region\n"
        "Subtag: US\n"
        "Description: United States\n"
    )
    records = list(iter_records(text.splitlines(keepends=True)))

    assert len(records) == 3
    assert records[0].fields == ["File-Date"]
    assert records[0].type is None
    assert records[1].description == "Pinyin romanization"
    assert records[1].get("Prefix") == "zh-Latn"
    assert records[1].fields == ["Type", "Subtag", "Description", "Prefix"]
    assert records[2].subtag == "US"


def test_repeated_descriptions_are_joined() -> None:
    """
    Test that repeated ``Description`` fields are joined with a pipe.

    :raises AssertionError: If the joined description is wrong.
    """
    (record,) = iter_records(
        ["Type: language", "Subtag: es", "Description: Spanish", "Description: Castilian"]
    )
    assert record.description == "Spanish | Castilian"


def test_last_entry_wins() -> None:
    """
    Test that a subtag registered twice keeps its last entry.

    :raises AssertionError: If the first entry is kept.
    """
    index = loads(
        "Type: region\nSubtag: US\nDescription: Old\n%%\n"
        "Type: region\nSubtag: US\nDescription: United States\n"
    )
    assert index.regions["US"].description == "United States"


def test_record_without_subtag_is_skipped() -> None:
    """
    Test that a typed record with no ``Subtag`` field is skipped, and that
    the records around it are still loaded.

    :raises AssertionError: If the record is indexed or the others are lost.
    """
    index = loads(
        "Type: language\nSubtag: en\nDescription: English\n%%\n"
        "Type: variant\nDescription: Orphan\nPrefix: en\n%%\n"
        "Type: region\nSubtag: US\nDescription: United States\n"
    )
    assert dict(index.variants) == {}
    assert index.languages["en"] == Language("en", "English")
    assert index.regions["US"] == Region("US", "United States")


def test_load_from_bytes_and_streams(registry_path: Path, index: RegistryIndex) -> None:
    """
    Test that bytes, binary streams and text streams load the same index as a
    path.

    :raises AssertionError: If an index differs from the one loaded by path.
    """
    raw = registry_path.read_bytes()
    assert load(raw) == index
    assert load(io.BytesIO(raw)) == index
    assert load(io.StringIO(raw.decode("utf-8"))) == index


def test_load_missing_file(tmp_path: Path) -> None:
    """
    Test that an unreadable source raises ``RegistryError``.

    :raises AssertionError: If no ``RegistryError`` is raised.
    """
    with pytest.raises(RegistryError):
        load(tmp_path / "missing.txt")


def test_load_invalid_utf8() -> None:
    """
    Test that bytes that are not UTF-8 raise ``RegistryError``.

    :raises AssertionError: If no ``RegistryError`` is raised.
    """
    with pytest.raises(RegistryError):
        load(b"Type: language\nSubtag: fr\nDescription: Fran\xe7ais\n")


@pytest.mark.parametrize(  # type: ignore[misc]
    "text",
    [
        "",
        "File-Date: 2024-11-19\n%%\n",
        "Type: language\nSubtag en\n",
    ],
)
def test_loads_unparseable(text: str) -> None:
    """
    Test that sources without subtag records or with malformed lines fail to
    load as a whole.

    :param text: The registry text.
    :raises AssertionError: If no ``RegistryError`` is raised.
    """
    with pytest.raises(RegistryError):
        loads(text)


def test_title_case() -> None:
    """
    Test script case folding.

    :raises AssertionError: If a code is folded incorrectly.
    """
    assert title_case("hANT") == "Hant"
    assert title_case("q") == "Q"
    assert title_case("") == ""
