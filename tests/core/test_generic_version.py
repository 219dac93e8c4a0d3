"""Tests for generic version parsing and ordering."""

import itertools

import pytest

from ucover.core.exceptions import MalformedVersionError
from ucover.core.versioning import GenericVersion, compare, parse

ORDERED = [
    "0.9",
    "1.0-alpha-SNAPSHOT",
    "1.0-alpha",
    "1.0-alpha1",
    "1.0-alpha-2",
    "1.0-beta",
    "1.0b2",
    "1.0-milestone-1",
    "1.0-rc1",
    "1.0-SNAPSHOT",
    "1.0",
    "1.0-sp",
    "1.0-1",
    "1.0.1-SNAPSHOT",
    "1.0.1",
    "1.1.0-SNAPSHOT",
    "1.1",
    "1.10",
    "2.0.0",
]


class TestParsing:
    """Grammar checks."""

    @pytest.mark.parametrize(
        "text", ["", "   ", "SNAPSHOT", "v1.0", "1.", "1..0", "1.0 beta", "1.0-", "1.0-@"]
    )
    def test_malformed(self, text):
        with pytest.raises(MalformedVersionError):
            parse(text)

    def test_malformed_is_value_error(self):
        """MalformedVersionError can be handled as a plain ValueError."""
        with pytest.raises(ValueError):
            GenericVersion.parse("latest")

    def test_text_is_preserved(self):
        v = parse(" 1.1.0-SNAPSHOT ")
        assert v.text == "1.1.0-SNAPSHOT"
        assert str(v) == "1.1.0-SNAPSHOT"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1.0.0", "1"),
            ("1.0-ga", "1"),
            ("2.0.Final", "2"),
            ("1.1.0-SNAPSHOT", "1.1-snapshot"),
            ("1.0b2", "1-beta-2"),
            ("3.4-CR1", "3.4-rc-1"),
        ],
    )
    def test_canonical(self, text, expected):
        assert parse(text).canonical == expected


class TestOrdering:
    """Ordering must be total, transitive and snapshot-aware."""

    def test_known_sequence(self):
        versions = [parse(v) for v in ORDERED]
        for lower, higher in zip(versions, versions[1:]):
            assert lower < higher, f"{lower} should sort before {higher}"

    def test_sorting_shuffled_input(self):
        shuffled = list(reversed(ORDERED))
        assert [str(v) for v in sorted(parse(v) for v in shuffled)] == ORDERED

    def test_transitive(self):
        versions = [parse(v) for v in ORDERED]
        for a, b, c in itertools.permutations(versions, 3):
            if a < b and b < c:
                assert a < c

    def test_equal_only_when_canonical_identical(self):
        versions = [parse(v) for v in ORDERED + ["1", "1.0.0", "1.0-GA", "1.0-snapshot"]]
        for a, b in itertools.combinations(versions, 2):
            assert (a == b) == (a.canonical == b.canonical)
            if a == b:
                assert hash(a) == hash(b)

    @pytest.mark.parametrize("release", ["1.0", "1.1.0", "2.3.4.5", "10"])
    def test_snapshot_below_release(self, release):
        assert parse(f"{release}-SNAPSHOT") < parse(release)

    def test_rc_and_cr_are_equal(self):
        assert parse("1.0-rc1") == parse("1.0-cr1")

    def test_trailing_zeros_ignored(self):
        assert compare("1", "1.0.0") == 0

    def test_compare(self):
        assert compare("1.0.0", "1.1.0-SNAPSHOT") == -1
        assert compare(parse("1.1.0-SNAPSHOT"), "1.0.0") == 1
        assert compare("1.0-final", parse("1.0")) == 0


class TestSnapshot:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1.1.0-SNAPSHOT", True),
            ("1.0-alpha-snapshot", True),
            ("1.0", False),
            ("1.0-SNAPSHOT-1", False),
            ("1.0-rc1", False),
        ],
    )
    def test_is_snapshot(self, text, expected):
        assert parse(text).is_snapshot is expected
