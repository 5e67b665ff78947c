"""Unit tests for shared types."""

import pytest

from copybara_runner.types import ExitCodeEntry, ExitCodeType, Transformation


class TestTransformationParse:
    """Tests for parsing ``from||to||path`` rules."""

    @pytest.mark.parametrize(
        "rule,expected",
        [
            ("a", Transformation("a", "", "**")),
            ("a||b", Transformation("a", "b", "**")),
            ("a||b||src/**", Transformation("a", "b", "src/**")),
            ("a||||", Transformation("a", "", "**")),
            ("a||||src/**", Transformation("a", "", "src/**")),
            ("a||b||src/**||ignored", Transformation("a", "b", "src/**")),
        ],
    )
    def test_parse(self, rule, expected):
        assert Transformation.parse(rule) == expected

    def test_parse_all_drops_empty_rules(self):
        rules = ["a||b", "", "c||d||e"]
        assert Transformation.parse_all(rules) == (
            Transformation("a", "b"),
            Transformation("c", "d", "e"),
        )

    def test_parse_all_empty(self):
        assert Transformation.parse_all([]) == ()


class TestExitCodeEntry:
    """Tests for the ok property."""

    @pytest.mark.parametrize(
        "kind,ok",
        [
            (ExitCodeType.SUCCESS, True),
            (ExitCodeType.WARNING, True),
            (ExitCodeType.ERROR, False),
        ],
    )
    def test_ok(self, kind, ok):
        assert ExitCodeEntry("copybara", kind).ok is ok

    def test_type_compares_to_string(self):
        assert ExitCodeType.WARNING == "warning"
