"""Data model shared by the range expander and its adapters."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class LiteralMember:
    """A member declared verbatim.

    A ``None`` discriminant means "next available value"; assigning it is left
    to whatever consumes the expansion.
    """

    name: str
    discriminant: int | None = None


@dataclass(frozen=True, slots=True)
class RangeMember:
    """A placeholder member standing for one member per integer in ``start..=end``.

    Attributes:
        name: Declared name of the placeholder, used by the default naming format.
        start: First discriminant of the range (included).
        end: Last discriminant of the range (included).
        format: Naming format; ``{index}`` and ``{value}`` are substituted.
            Defaults to ``"<name>{index}"``.
        range_check: Name of the membership-test function to generate.

    """

    name: str
    start: int
    end: int
    format: str | None = None
    range_check: str | None = None

    @property
    def size(self) -> int:
        """Number of members the range expands to."""
        return max(0, self.end - self.start + 1)


MemberDeclaration = LiteralMember | RangeMember


@dataclass(frozen=True, slots=True)
class ExpandedMember:
    """A concrete member of the expanded enum."""

    name: str
    discriminant: int | None
    origin: str | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class RangeCheck:
    """A membership-test function to attach to the expanded enum."""

    function_name: str
    start: int
    end: int

    def contains(self, value: int) -> bool:
        """Check whether an already-cast value falls inside the range."""
        return value >= self.start and value <= self.end


@dataclass(frozen=True, slots=True)
class ExpansionResult:
    """Output of a single expansion.

    ``checks`` keeps range declaration order; checks sharing a name are not merged.
    """

    members: tuple[ExpandedMember, ...]
    checks: tuple[RangeCheck, ...] = ()

    def names(self) -> list[str]:
        return [member.name for member in self.members]

    def check_named(self, function_name: str) -> RangeCheck | None:
        """Return the first check with the given function name, if any."""
        for check in self.checks:
            if check.function_name == function_name:
                return check
        return None
