import json
from pathlib import Path

import pytest

from type_to_schema.pipeline.synthesis.naming import NameKind, first_of, resolve_name
from type_to_schema.utils import RenameRule, format_docs, strip_raw_identifier


def load_test_data():
    """Load test cases from JSON file"""
    test_data_path = Path(__file__).parent / "test_data" / "rename_rule_tests.json"
    with open(test_data_path) as f:
        return json.load(f)


@pytest.mark.parametrize("test_case", load_test_data(), ids=lambda tc: f"{tc['rule']}-{tc['field']}")
def test_rename_rules(test_case):
    """Test case transforms for field and variant identifiers"""
    rule = RenameRule(test_case["rule"])
    assert rule.apply_to_field(test_case["field"]) == test_case["expected_field"]
    assert rule.apply_to_variant(test_case["variant"]) == test_case["expected_variant"]


def test_explicit_rename_wins():
    assert resolve_name("first_name", "given", RenameRule.CAMEL_CASE) == "given"


def test_rename_all_applies_without_rename():
    assert resolve_name("first_name", None, RenameRule.CAMEL_CASE) == "firstName"
    assert resolve_name("VeryTasty", None, RenameRule.KEBAB_CASE, NameKind.VARIANT) == "very-tasty"


def test_original_identifier_is_default():
    assert resolve_name("first_name") == "first_name"
    assert resolve_name("r#type") == "type"
    assert resolve_name("r#type", rename_all=RenameRule.UPPER_CASE) == "TYPE"


def test_first_of():
    assert first_of(None, "b", "c") == "b"
    assert first_of(None, None) is None
    assert first_of(False, True) is False


def test_strip_raw_identifier():
    assert strip_raw_identifier("r#match") == "match"
    assert strip_raw_identifier("ranger") == "ranger"


def test_format_docs():
    assert format_docs([" First line.", "", " Second line.", ""]) == "First line.\n\nSecond line."
    assert format_docs(["  indented"]) == "indented"
    assert format_docs([]) == ""
