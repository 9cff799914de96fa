"""Tests for the range expander."""

import logging

import pytest

from enumrange import (
    ExpandedMember,
    LiteralMember,
    RangeCheck,
    RangeMember,
    Representation,
    expand,
    expand_range,
    resolve_member_name,
)
from enumrange._expand import _copy_literal


def _pairs(members: tuple[ExpandedMember, ...]) -> list[tuple[str, int | None]]:
    return [(member.name, member.discriminant) for member in members]


class TestScenarios:
    def test_literals_around_a_range_with_check(self) -> None:
        members = [
            LiteralMember("Zero", 0),
            LiteralMember("One", 1),
            RangeMember("PrivateUse", 10, 12, format="PU{index}_{value}", range_check="is_pu"),
            LiteralMember("Three", 3),
        ]

        result = expand(members, Representation.U16)

        assert _pairs(result.members) == [
            ("Zero", 0),
            ("One", 1),
            ("PU0_10", 10),
            ("PU1_11", 11),
            ("PU2_12", 12),
            ("Three", 3),
        ]
        assert result.checks == (RangeCheck("is_pu", 10, 12),)

    def test_single_value_range(self) -> None:
        result = expand([RangeMember("Only", 5, 5)])

        assert _pairs(result.members) == [("Only0", 5)]

    def test_inverted_range_expands_to_nothing_but_keeps_its_check(self) -> None:
        members = [
            LiteralMember("Zero", 0),
            RangeMember("Empty", 6, 5, range_check="is_empty"),
            LiteralMember("Last", 7),
        ]

        result = expand(members, Representation.U8)

        assert _pairs(result.members) == [("Zero", 0), ("Last", 7)]
        assert result.checks == (RangeCheck("is_empty", 6, 5),)
        assert not any(result.checks[0].contains(value) for value in range(0, 256))

    def test_no_ranges_is_identity(self) -> None:
        members = [LiteralMember("A", 1), LiteralMember("B"), LiteralMember("C", 10)]

        result = expand(members, Representation.U8)

        assert _pairs(result.members) == [("A", 1), ("B", None), ("C", 10)]
        assert result.checks == ()

    def test_empty_input(self) -> None:
        result = expand([], Representation.U8)

        assert result.members == ()
        assert result.checks == ()


class TestNameResolution:
    def test_default_format_uses_declared_name_and_index(self) -> None:
        result = expand([RangeMember("Reserved", 100, 102)])

        assert result.names() == ["Reserved0", "Reserved1", "Reserved2"]

    @pytest.mark.parametrize(
        ("template", "index", "value", "expected"),
        [
            ("Unassigned{value}", 3, 203, "Unassigned203"),
            ("WellKnown{index}", 4, 210, "WellKnown4"),
            ("V{value}_I{index}", 0, 7, "V7_I0"),
            ("{value}_{index}_{value}", 2, 12, "12_2_12"),
            ("Fixed", 1, 1, "Fixed"),
            ("Keep{other}{index}", 1, 11, "Keep{other}1"),
            ("{{index}}", 5, 9, "{5}"),
        ],
    )
    def test_placeholders_are_replaced_textually(self, template: str, index: int, value: int, expected: str) -> None:
        assert resolve_member_name("Ignored", template, index, value) == expected

    def test_default_template_when_none(self) -> None:
        assert resolve_member_name("Block", None, 3, 42) == "Block3"

    def test_negative_values(self) -> None:
        members = expand_range(RangeMember("Neg", -2, 0, format="Neg{index}_{value}"))

        assert [(member.name, member.discriminant) for member in members] == [
            ("Neg0_-2", -2),
            ("Neg1_-1", -1),
            ("Neg2_0", 0),
        ]


class TestOrdering:
    def test_several_ranges_interleaved_with_literals(self) -> None:
        members = [
            RangeMember("First", 0, 1),
            LiteralMember("Middle", 50),
            RangeMember("Second", 60, 61),
            RangeMember("Third", 70, 70),
            LiteralMember("Last", 99),
        ]

        result = expand(members)

        assert result.names() == ["First0", "First1", "Middle", "Second0", "Second1", "Third0", "Last"]

    def test_literal_order_is_preserved(self) -> None:
        members = [
            LiteralMember("Z", 26),
            RangeMember("R", 1, 3),
            LiteralMember("A", 1),
            LiteralMember("M"),
        ]

        result = expand(members)
        literal_names = [member.name for member in result.members if member.origin is None]

        assert literal_names == ["Z", "A", "M"]

    def test_range_members_record_their_origin(self) -> None:
        result = expand([LiteralMember("A", 0), RangeMember("Block", 1, 2)])

        assert [member.origin for member in result.members] == [None, "Block", "Block"]

    def test_origin_does_not_affect_equality(self) -> None:
        assert ExpandedMember("Block0", 1, origin="Block") == ExpandedMember("Block0", 1)


class TestCounts:
    @pytest.mark.parametrize(
        ("ranges", "expected_count"),
        [
            ([(0, 0)], 2),
            ([(0, 9)], 11),
            ([(5, 4)], 1),
            ([(10, 20), (200, 205), (206, 210)], 23),
            ([(3, 1), (1, 3)], 4),
        ],
    )
    def test_output_length(self, ranges: list[tuple[int, int]], expected_count: int) -> None:
        members = [LiteralMember("Lit", 1000)] + [
            RangeMember(f"R{i}", start, end) for i, (start, end) in enumerate(ranges)
        ]

        result = expand(members)

        assert len(result.members) == expected_count
        assert len(result.members) == 1 + sum(member.size for member in members if isinstance(member, RangeMember))

    def test_discriminants_are_contiguous_and_ascending(self) -> None:
        result = expand([RangeMember("Block", 206, 210)])

        assert [member.discriminant for member in result.members] == [206, 207, 208, 209, 210]


class TestRangeChecks:
    def test_no_check_without_check_name(self) -> None:
        result = expand([RangeMember("Block", 1, 3)], Representation.U8)

        assert result.checks == ()

    def test_no_check_without_representation(self) -> None:
        result = expand([RangeMember("Block", 1, 3, range_check="is_block")])

        assert len(result.members) == 3
        assert result.checks == ()

    def test_one_check_per_range_in_declaration_order(self) -> None:
        members = [
            RangeMember("PrivateUse", 10, 20, range_check="is_private_use"),
            LiteralMember("Three", 3),
            RangeMember("Unassigned", 200, 205, range_check="is_unassigned"),
            RangeMember("WellKnown", 206, 210, range_check="is_well_known"),
        ]

        result = expand(members, Representation.U16)

        assert result.checks == (
            RangeCheck("is_private_use", 10, 20),
            RangeCheck("is_unassigned", 200, 205),
            RangeCheck("is_well_known", 206, 210),
        )
        assert result.check_named("is_unassigned") == RangeCheck("is_unassigned", 200, 205)
        assert result.check_named("missing") is None

    def test_duplicate_check_names_are_not_merged(self) -> None:
        members = [
            RangeMember("A", 1, 2, range_check="is_reserved"),
            RangeMember("B", 5, 6, range_check="is_reserved"),
        ]

        result = expand(members, Representation.U8)

        assert result.checks == (RangeCheck("is_reserved", 1, 2), RangeCheck("is_reserved", 5, 6))

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(9, False), (10, True), (15, True), (20, True), (21, False)],
    )
    def test_check_bounds_are_inclusive(self, value: int, expected: bool) -> None:
        assert RangeCheck("is_private_use", 10, 20).contains(value) is expected


def test_expansion_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="enumrange._expand")

    expand([RangeMember("PrivateUse", 10, 12, range_check="is_pu")], Representation.U8)

    assert "Expanded range 'PrivateUse' [10, 12] into 3 member(s)" in caplog.text
    assert "Generated range check 'is_pu'" in caplog.text


def test_unqueued_range_is_an_internal_fault() -> None:
    with pytest.raises(AssertionError, match="without being queued"):
        _copy_literal(RangeMember("Block", 1, 2))
