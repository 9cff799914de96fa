"""Range expansion: turn range placeholders into concrete members.

This is a pure function of its inputs. Expansion is a collection pass that
queues the range placeholders with their positions, followed by a merge walk
that copies literal members through and replaces each placeholder in place
with its expansion.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from ._models import ExpandedMember, ExpansionResult, RangeCheck, RangeMember

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._models import MemberDeclaration
    from ._representation import Representation

logger = logging.getLogger(__name__)

INDEX_PLACEHOLDER = "{index}"
VALUE_PLACEHOLDER = "{value}"


def default_format(name: str) -> str:
    """Return the naming format used when a range does not provide one."""
    return name + INDEX_PLACEHOLDER


def resolve_member_name(name: str, template: str | None, index: int, value: int) -> str:
    """Compute the name of one expanded member.

    Placeholders are replaced textually, so unknown ones such as ``{other}``
    survive untouched.

    Args:
        name: Declared name of the range placeholder.
        template: Naming format of the range, or None for the default.
        index: Zero-based position of the member within the range.
        value: Discriminant of the member.

    Returns:
        The member name. It is not checked for being a valid identifier.

    """
    fmt = template if template is not None else default_format(name)
    return fmt.replace(INDEX_PLACEHOLDER, str(index)).replace(VALUE_PLACEHOLDER, str(value))


def expand_range(member: RangeMember) -> list[ExpandedMember]:
    """Expand a single range into its members, ascending. Empty when ``start > end``."""
    return [
        ExpandedMember(
            name=resolve_member_name(member.name, member.format, value - member.start, value),
            discriminant=value,
            origin=member.name,
        )
        for value in range(member.start, member.end + 1)
    ]


def range_check_for(member: RangeMember, representation: Representation | None) -> RangeCheck | None:
    """Build the check requested by a range, if it can be generated.

    A check needs both a function name and an integer representation to cast
    into; anything else yields None without complaint. Inverted ranges still
    get their (unsatisfiable) check.
    """
    if member.range_check is None or representation is None:
        return None
    return RangeCheck(function_name=member.range_check, start=member.start, end=member.end)


def expand(
    members: Sequence[MemberDeclaration],
    representation: Representation | None = None,
) -> ExpansionResult:
    """Expand every range placeholder of an enum declaration.

    Args:
        members: Member declarations in source order.
        representation: Integer representation of the enum, if any. Without it
            no range check is generated.

    Returns:
        ExpansionResult with the expanded members, in order, and the checks.

    Raises:
        AssertionError: If a queued range is skipped during the merge walk.
            This cannot happen for well-formed input and signals a bug here.

    Example:
        >>> result = expand(
        ...     [
        ...         LiteralMember("Zero", 0),
        ...         RangeMember("PrivateUse", 10, 11, format="PU{index}_{value}", range_check="is_pu"),
        ...     ],
        ...     Representation.U8,
        ... )
        >>> result.names()
        ['Zero', 'PU0_10', 'PU1_11']

    """
    ranges: deque[tuple[int, RangeMember]] = deque(
        (position, member) for position, member in enumerate(members) if isinstance(member, RangeMember)
    )

    if not ranges:
        return ExpansionResult(
            members=tuple(_copy_literal(member) for member in members),
        )

    expanded: list[ExpandedMember] = []
    checks: list[RangeCheck] = []

    pending: tuple[int, RangeMember] | None = ranges.popleft()
    for position, member in enumerate(members):
        if pending is None:
            expanded.append(_copy_literal(member))
            continue

        range_position, range_member = pending
        if position < range_position:
            expanded.append(_copy_literal(member))
        elif position == range_position:
            range_members = expand_range(range_member)
            logger.debug(
                f"Expanded range '{range_member.name}' [{range_member.start}, {range_member.end}] "
                f"into {len(range_members)} member(s)",
            )
            expanded.extend(range_members)

            check = range_check_for(range_member, representation)
            if check is not None:
                logger.debug(f"Generated range check '{check.function_name}' for '{range_member.name}'")
                checks.append(check)

            pending = ranges.popleft() if ranges else None
        else:
            msg = f"Range '{range_member.name}' at position {range_position} was skipped (now at {position})"
            raise AssertionError(msg)

    return ExpansionResult(members=tuple(expanded), checks=tuple(checks))


def _copy_literal(member: MemberDeclaration) -> ExpandedMember:
    if isinstance(member, RangeMember):
        msg = f"Range '{member.name}' reached the merge walk without being queued"
        raise AssertionError(msg)
    return ExpandedMember(name=member.name, discriminant=member.discriminant)
