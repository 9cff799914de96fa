"""Module providing a decorator to create IntEnum with range-based members."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import TYPE_CHECKING, Any, TypeVar

from ._expand import expand
from ._models import LiteralMember, RangeMember
from ._representation import Representation, parse_representation

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ._models import MemberDeclaration, RangeCheck

_IntEnumT = TypeVar("_IntEnumT", bound=IntEnum)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Range:
    """Placeholder for the members ``start..=end`` in a class decorated with `enum_range`.

    Args:
        start: First value of the range (included).
        end: Last value of the range (included).
        format: Member naming format. ``{index}`` is replaced by the position in
            the range (from 0) and ``{value}`` by the member value. Defaults to
            the attribute name followed by ``{index}``.
        range_check: Name of a method to generate that tells whether a member is
            in the range. Only generated when the enum has a representation.

    """

    start: int
    end: int
    format: str | None = None
    range_check: str | None = None

    def to_member(self, name: str) -> RangeMember:
        return RangeMember(
            name=name,
            start=self.start,
            end=self.end,
            format=self.format,
            range_check=self.range_check,
        )


def _resolve_representation(
    representation: Representation | str | Iterable[str] | None,
) -> Representation | None:
    if representation is None or isinstance(representation, Representation):
        return representation
    return parse_representation(representation)


def _collect_members(cls: type) -> tuple[list[MemberDeclaration], dict[str, Any]]:
    """Split a class body into member declarations and plain attributes."""
    declarations: list[MemberDeclaration] = []
    attributes: dict[str, Any] = {}

    for name, value in vars(cls).items():
        if name.startswith("__") and name.endswith("__"):
            continue
        if name.startswith("_"):
            attributes[name] = value
        elif isinstance(value, Range):
            declarations.append(value.to_member(name))
        elif isinstance(value, auto):
            declarations.append(LiteralMember(name=name))
        elif isinstance(value, int) and not isinstance(value, bool):
            declarations.append(LiteralMember(name=name, discriminant=value))
        elif callable(value) or isinstance(value, (staticmethod, classmethod, property)):
            attributes[name] = value
        else:
            msg = f"Member '{name}' of {cls.__name__} must be an int, auto() or Range, got {type(value).__name__}"
            raise TypeError(msg)

    return declarations, attributes


def _make_range_check(check: RangeCheck, representation: Representation) -> Callable[[IntEnum], bool]:
    def range_check(self: IntEnum) -> bool:
        return check.contains(representation.cast(int(self)))

    range_check.__name__ = check.function_name
    range_check.__qualname__ = check.function_name
    range_check.__doc__ = f"Check if the member value, as {representation}, is in [{check.start}, {check.end}]."
    return range_check


def enum_range(
    *,
    representation: Representation | str | Iterable[str] | None = None,
    base: type[_IntEnumT] = IntEnum,  # type: ignore[assignment]
) -> Callable[[type], type[_IntEnumT]]:
    """Decorator to generate range-based members on an integer enum.

    The decorated class is a plain class whose public attributes declare the
    members in order: ``int`` values and ``auto()`` are kept as they are, each
    `Range` is replaced in place by one member per value of the range.

    Args:
        representation: Integer kind of the member values (e.g. ``"u16"`` or
            ``Representation.U16``), or a list of hints such as ``["C", "u16"]``.
            Range checks are only generated when it names an integer kind.
        base: Enum type to create (default IntEnum).

    Returns:
        A decorator that turns the class into an enum of type ``base``.

    Examples:
        >>> @enum_range(representation="u16")
        ... class Ranged:
        ...     Zero = 0
        ...     PrivateUse = Range(10, 12, format="PU{index}_{value}", range_check="is_private_use")
        ...     Three = 3
        >>> list(Ranged)
        [<Ranged.Zero: 0>, <Ranged.PU0_10: 10>, <Ranged.PU1_11: 11>, <Ranged.PU2_12: 12>, <Ranged.Three: 3>]
        >>> Ranged.PU1_11.is_private_use()
        True
        >>> Ranged.is_private_use(Ranged.Three)
        False

    """
    if not (issubclass(base, Enum) and issubclass(base, int)):
        msg = f"enum_range() base must be an integer enum type, got {base!r}"
        raise TypeError(msg)

    resolved = _resolve_representation(representation)

    def decorator(cls: type) -> type[_IntEnumT]:
        if issubclass(cls, Enum):
            msg = f"enum_range() must decorate a plain class, not the enum {cls.__name__}"
            raise TypeError(msg)

        declarations, attributes = _collect_members(cls)
        result = expand(declarations, resolved)
        logger.debug(
            f"{cls.__name__}: {len(declarations)} declaration(s) expanded to "
            f"{len(result.members)} member(s) and {len(result.checks)} range check(s)",
        )

        # Absent discriminants follow the base enum's own auto() numbering.
        members = [
            (member.name, auto() if member.discriminant is None else member.discriminant)
            for member in result.members
        ]
        enum_cls = base(cls.__name__, members, module=cls.__module__, qualname=cls.__qualname__)  # type: ignore[call-overload]

        for name, value in attributes.items():
            setattr(enum_cls, name, value)
        if resolved is not None:
            for check in result.checks:
                setattr(enum_cls, check.function_name, _make_range_check(check, resolved))

        if cls.__doc__ is not None:
            enum_cls.__doc__ = cls.__doc__
        enum_cls.__enum_range__ = result
        return enum_cls

    return decorator
