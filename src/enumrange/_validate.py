"""Optional strict validation of enum declarations.

Expansion itself is permissive: inverted ranges expand to nothing, colliding
names and check functions are passed through. This module reports those
situations as issues so that callers can decide whether to reject the
declaration. Nothing here raises.
"""

from __future__ import annotations

import keyword
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from ._expand import expand
from ._models import RangeMember

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._models import MemberDeclaration
    from ._representation import Representation


class IssueCode(StrEnum):
    """Kind of problem found in a declaration."""

    INVERTED_RANGE = "inverted-range"
    DUPLICATE_CHECK = "duplicate-check"
    CHECK_WITHOUT_REPR = "check-without-repr"
    DUPLICATE_NAME = "duplicate-name"
    INVALID_IDENTIFIER = "invalid-identifier"
    OUT_OF_RANGE = "out-of-range"


@dataclass(frozen=True)
class ValidationIssue:
    """A problem attached to a declared or expanded member."""

    member: str
    code: IssueCode
    message: str


def _validate_ranges(
    members: Sequence[MemberDeclaration],
    representation: Representation | None,
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    seen_checks: set[str] = set()

    for member in members:
        if not isinstance(member, RangeMember):
            continue

        if member.start > member.end:
            issues.append(
                ValidationIssue(
                    member=member.name,
                    code=IssueCode.INVERTED_RANGE,
                    message=f"Range '{member.name}' has start {member.start} after end {member.end}",
                ),
            )

        if member.range_check is None:
            continue

        if representation is None:
            issues.append(
                ValidationIssue(
                    member=member.name,
                    code=IssueCode.CHECK_WITHOUT_REPR,
                    message=(
                        f"Range check '{member.range_check}' of '{member.name}' is not generated "
                        "because the enum has no integer representation"
                    ),
                ),
            )
        if member.range_check in seen_checks:
            issues.append(
                ValidationIssue(
                    member=member.name,
                    code=IssueCode.DUPLICATE_CHECK,
                    message=f"Range check '{member.range_check}' is declared more than once",
                ),
            )
        seen_checks.add(member.range_check)

    return issues


def validate_declarations(
    members: Sequence[MemberDeclaration],
    representation: Representation | None = None,
) -> list[ValidationIssue]:
    """Report everything a strict consumer would reject in a declaration.

    Args:
        members: Member declarations in source order.
        representation: Integer representation of the enum, if any.

    Returns:
        Issues in declaration order, ranges first, then expanded members.

    """
    issues = _validate_ranges(members, representation)

    seen_names: set[str] = set()
    for member in expand(members, representation).members:
        if not member.name.isidentifier() or keyword.iskeyword(member.name):
            issues.append(
                ValidationIssue(
                    member=member.name,
                    code=IssueCode.INVALID_IDENTIFIER,
                    message=f"'{member.name}' is not a valid identifier",
                ),
            )
        if member.name in seen_names:
            issues.append(
                ValidationIssue(
                    member=member.name,
                    code=IssueCode.DUPLICATE_NAME,
                    message=f"Member '{member.name}' is defined more than once",
                ),
            )
        seen_names.add(member.name)

        if (
            representation is not None
            and member.discriminant is not None
            and not representation.can_hold(member.discriminant)
        ):
            issues.append(
                ValidationIssue(
                    member=member.name,
                    code=IssueCode.OUT_OF_RANGE,
                    message=(
                        f"Value {member.discriminant} of '{member.name}' does not fit in {representation}"
                        f" [{representation.min_value}, {representation.max_value}]"
                    ),
                ),
            )

    return issues
