"""
Jurisdiction Pack Tests

Tests that verify:
1. Bundled packs load and validate
2. Schema errors surface as JurisdictionValidationError
3. Version and file errors are reported with their own codes
4. Catalogs check parent references
5. Translation tables load and fall back quietly
"""
from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from holidayengine.exceptions import (
    JurisdictionLoadError,
    JurisdictionValidationError,
    JurisdictionVersionMismatch,
    UnknownJurisdictionError,
)
from holidayengine.models import (
    FixedDate,
    NthWeekday,
    ShiftDirection,
    ShiftToWeekday,
    Weekday,
    YearSwitch,
)
from holidayengine.packs import (
    BUNDLED_PACKS_DIR,
    DictTranslations,
    InMemoryCatalog,
    JurisdictionPackLoader,
    PackCatalog,
    check_schema_version,
    load_jurisdiction_pack,
    load_jurisdiction_pack_from_string,
    load_translations,
)
from tests.conftest import make_definition


MINIMAL_PACK = """
schema_version: "1.0.0"
code: XX
name: Example
timezone: Europe/Amsterdam
holidays:
  - key: kingsDay
    names: {nl: Koningsdag, en-GB: King's Day}
    date: {kind: fixed, month: 4, day: 27}
"""


def write_pack(directory: Path, filename: str, data: dict) -> Path:
    path = directory / filename
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def pack_data(**overrides) -> dict:
    data = yaml.safe_load(MINIMAL_PACK)
    data.update(overrides)
    return data


class TestBundledPacks:
    """The packs shipped with holidayengine."""

    @pytest.mark.parametrize("filename", ["au.yaml", "au_act.yaml"])
    def test_pack_loads(self, filename: str) -> None:
        definition = load_jurisdiction_pack(BUNDLED_PACKS_DIR / filename)
        assert definition.rules

    def test_catalog_codes(self, bundled_catalog) -> None:
        assert bundled_catalog.codes() == ["AU", "AU-ACT"]
        assert bundled_catalog.children_of("AU") == ["AU-ACT"]

    def test_act_definition(self, bundled_catalog) -> None:
        act = bundled_catalog.get_definition("AU-ACT")
        assert act.parent == "AU"
        assert act.timezone == "Australia/Sydney"
        assert act.locale == "en_AU"

    def test_converted_expressions(self, bundled_catalog) -> None:
        act = bundled_catalog.get_definition("AU-ACT")
        assert act.get_rule("canberraDay").expression == YearSwitch(
            year=2007,
            before=NthWeekday(3, Weekday.MONDAY, 3),
            after=NthWeekday(3, Weekday.MONDAY, 2),
        )
        reconciliation = act.get_rule("reconciliationDay")
        assert reconciliation.since == 2018
        assert reconciliation.expression == ShiftToWeekday(
            FixedDate(5, 27), Weekday.MONDAY, ShiftDirection.FORWARD
        )

    def test_substitute_policy(self, bundled_catalog) -> None:
        christmas = bundled_catalog.get_definition("AU").get_rule("christmasDay")
        assert christmas.substitute.on == frozenset({Weekday.SATURDAY, Weekday.SUNDAY})
        assert christmas.substitute.to == Weekday.MONDAY


class TestLoader:
    """Loading packs from strings and files."""

    def test_from_string(self) -> None:
        definition = load_jurisdiction_pack_from_string(MINIMAL_PACK)
        assert definition.code == "XX"
        assert definition.locale is None
        assert definition.get_rule("kingsDay").names == {"nl": "Koningsdag", "en_GB": "King's Day"}

    def test_from_json(self, tmp_path: Path) -> None:
        path = tmp_path / "xx.json"
        path.write_text(json.dumps(pack_data()), encoding="utf-8")
        assert load_jurisdiction_pack(path).code == "XX"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(JurisdictionLoadError) as exc_info:
            load_jurisdiction_pack(tmp_path / "missing.yaml")
        assert exc_info.value.code == "HE_PACK_LOAD_ERROR"

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "xx.yaml"
        path.write_bytes(b"code: XX\nname: \xff\xfe\n")
        with pytest.raises(JurisdictionLoadError):
            load_jurisdiction_pack(path)
        with pytest.raises(JurisdictionLoadError):
            JurisdictionPackLoader().load_directory(tmp_path)

    def test_malformed_yaml(self) -> None:
        with pytest.raises(JurisdictionLoadError):
            load_jurisdiction_pack_from_string("code: [unclosed")

    def test_not_a_mapping(self) -> None:
        with pytest.raises(JurisdictionValidationError):
            load_jurisdiction_pack_from_string("- just\n- a list\n")

    def test_version_mismatch(self) -> None:
        with pytest.raises(JurisdictionVersionMismatch) as exc_info:
            JurisdictionPackLoader().load_dict(pack_data(schema_version="2.0.0"))
        assert exc_info.value.details["expected_version"] == "1.0.0"

    def test_version_mismatch_allowed_when_lenient(self) -> None:
        loader = JurisdictionPackLoader(strict_version=False)
        assert loader.load_dict(pack_data(schema_version="2.0.0")).code == "XX"

    def test_check_schema_version(self) -> None:
        assert check_schema_version({"schema_version": "1.4.0"})
        assert check_schema_version({})
        assert not check_schema_version({"schema_version": "0.9"})

    def test_load_directory_skips_non_packs(self, tmp_path: Path) -> None:
        write_pack(tmp_path, "xx.yaml", pack_data())
        write_pack(tmp_path, "translations.yaml", {"kingsDay": {"en": "King's Day"}})
        definitions = JurisdictionPackLoader().load_directory(tmp_path)
        assert [d.code for d in definitions] == ["XX"]


class TestSchemaValidation:
    """Invalid packs are rejected with readable errors."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"code": "netherlands"},
            {"timezone": ""},
            {"holidays": [{"key": "x", "date": {"kind": "lunar", "month": 1}}]},
            {"holidays": [{"key": "x", "date": {"kind": "fixed", "month": 13, "day": 1}}]},
            {"holidays": [{"key": "x", "date": {"kind": "nth_weekday", "month": 6, "weekday": "monday", "n": 0}}]},
            {"holidays": [{"key": "x", "date": {"kind": "fixed", "month": 1, "day": 1}, "since": 2020, "until": 2019}]},
            {"holidays": [{"key": "x", "date": {"kind": "fixed", "month": 1, "day": 1}, "unknown": True}]},
            {"parent": "XX"},
        ],
    )
    def test_invalid_pack(self, overrides: dict) -> None:
        with pytest.raises(JurisdictionValidationError) as exc_info:
            JurisdictionPackLoader().load_dict(pack_data(**overrides))
        assert exc_info.value.code == "HE_PACK_VALIDATION_ERROR"

    def test_duplicate_keys(self) -> None:
        rule = {"key": "x", "date": {"kind": "fixed", "month": 1, "day": 1}}
        with pytest.raises(JurisdictionValidationError) as exc_info:
            JurisdictionPackLoader().load_dict(pack_data(holidays=[rule, rule]))
        assert exc_info.value.details["errors"]

    def test_unknown_timezone(self) -> None:
        with pytest.raises(JurisdictionValidationError) as exc_info:
            JurisdictionPackLoader().load_dict(pack_data(timezone="Nowhere/Special"))
        assert exc_info.value.jurisdiction == "XX"

    def test_impossible_fixed_date(self) -> None:
        rule = {"key": "x", "date": {"kind": "fixed", "month": 2, "day": 30}}
        with pytest.raises(JurisdictionValidationError):
            JurisdictionPackLoader().load_dict(pack_data(holidays=[rule]))

    @pytest.mark.parametrize(
        "expression",
        [
            {"kind": "fixed", "month": 2, "day": 29},
            {"kind": "weekday_on_or_after", "month": 12, "day": 31, "weekday": "monday"},
            {"kind": "weekday_on_or_before", "month": 1, "day": 2, "weekday": "friday"},
        ],
    )
    def test_date_missing_in_some_years(self, expression: dict) -> None:
        rule = {"key": "x", "date": expression}
        with pytest.raises(JurisdictionValidationError):
            JurisdictionPackLoader().load_dict(pack_data(holidays=[rule]))

    def test_malformed_name_locale(self) -> None:
        rule = {"key": "x", "names": {"english": "X"}, "date": {"kind": "fixed", "month": 1, "day": 1}}
        with pytest.raises(JurisdictionValidationError):
            JurisdictionPackLoader().load_dict(pack_data(holidays=[rule]))


class TestCatalogs:
    """Catalog lookups and reference checks."""

    def test_unknown_code(self, bundled_catalog) -> None:
        with pytest.raises(UnknownJurisdictionError) as exc_info:
            bundled_catalog.get_definition("NZ")
        assert exc_info.value.details["known"] == ["AU", "AU-ACT"]

    def test_case_insensitive_lookup(self, bundled_catalog) -> None:
        assert bundled_catalog.get_definition("au-act").code == "AU-ACT"
        assert "au" in bundled_catalog

    def test_duplicate_code(self) -> None:
        with pytest.raises(JurisdictionValidationError):
            InMemoryCatalog([make_definition("XX"), make_definition("XX")])

    def test_missing_parent(self) -> None:
        with pytest.raises(UnknownJurisdictionError):
            InMemoryCatalog([make_definition("XX-YY", parent="XX")])

    def test_pack_catalog_from_directory(self, tmp_path: Path) -> None:
        write_pack(tmp_path, "xx.yaml", pack_data())
        write_pack(tmp_path, "xx_yy.yaml", pack_data(code="XX-YY", parent="XX", holidays=[]))
        catalog = PackCatalog(tmp_path)
        assert catalog.codes() == ["XX", "XX-YY"]
        assert len(catalog) == 2

    def test_pack_catalog_with_orphan(self, tmp_path: Path) -> None:
        write_pack(tmp_path, "xx_yy.yaml", pack_data(code="XX-YY", parent="XX"))
        with pytest.raises(UnknownJurisdictionError):
            PackCatalog(tmp_path)


class TestTranslations:
    """Translation tables."""

    def test_bundled(self, bundled_translations) -> None:
        assert bundled_translations.get_translations("secondChristmasDay")["en_AU"] == "Boxing Day"
        assert "substituteHoliday" in bundled_translations

    def test_unknown_key_is_empty(self, bundled_translations) -> None:
        assert dict(bundled_translations.get_translations("noSuchHoliday")) == {}

    def test_locales_normalized(self) -> None:
        table = DictTranslations({"labourDay": {"en-US": "Labor Day"}})
        assert table.get_translations("labourDay") == {"en_US": "Labor Day"}
        assert table.keys() == ["labourDay"]

    def test_load_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "names.yaml"
        path.write_text("kingsDay:\n  nl: Koningsdag\n", encoding="utf-8")
        assert len(load_translations(path)) == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(JurisdictionLoadError):
            load_translations(tmp_path / "missing.yaml")

    def test_wrong_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "names.yaml"
        path.write_text("kingsDay: Koningsdag\n", encoding="utf-8")
        with pytest.raises(JurisdictionValidationError):
            load_translations(path)

    def test_malformed_locale(self, tmp_path: Path) -> None:
        path = tmp_path / "names.yaml"
        path.write_text("kingsDay:\n  dutch: Koningsdag\n", encoding="utf-8")
        with pytest.raises(JurisdictionValidationError):
            load_translations(path)

    def test_malformed_substitute_template(self, tmp_path: Path) -> None:
        path = tmp_path / "names.yaml"
        path.write_text("substituteHoliday:\n  en: \"{name} observed\"\n", encoding="utf-8")
        with pytest.raises(JurisdictionValidationError):
            load_translations(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "names.yaml"
        path.write_bytes(b"kingsDay:\n  nl: \xff\xfe\n")
        with pytest.raises(JurisdictionLoadError):
            load_translations(path)
