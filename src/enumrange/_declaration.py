"""Declaration file schema.

A declaration file is a TOML document with one ``[[enums]]`` table per enum::

    [[enums]]
    name = "RangedEnum"
    repr = "u16"
    members = [
        { name = "Zero", value = 0 },
        { name = "PrivateUse", range = { start = 10, end = 20, format = "PrivateUse{index}_{value}", range_check = "is_private_use" } },
        { name = "Three", value = 3 },
    ]
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ._expand import expand
from ._models import ExpansionResult, LiteralMember, MemberDeclaration, RangeMember
from ._representation import Representation, parse_representation


class RangeSpec(BaseModel):
    """Bounds and options of a range placeholder."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    start: int
    end: int
    format: str | None = Field(default=None, description="Member naming format using {index} and {value}")
    range_check: str | None = Field(default=None, description="Name of the generated membership check")


class LiteralEntry(BaseModel):
    """A member declared as is. A missing value means "next available value"."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    value: int | None = None

    def to_member(self) -> LiteralMember:
        return LiteralMember(name=self.name, discriminant=self.value)


class RangeEntry(BaseModel):
    """A placeholder replaced by one member per value of its range."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    range: RangeSpec

    def to_member(self) -> RangeMember:
        return RangeMember(
            name=self.name,
            start=self.range.start,
            end=self.range.end,
            format=self.range.format,
            range_check=self.range.range_check,
        )


class EnumDeclaration(BaseModel):
    """One enum of a declaration file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    repr: list[str] = Field(
        default_factory=list,
        description='Representation hints, e.g. "u16" or ["C", "u16"]; the first integer kind is used',
    )
    base: Literal["IntEnum", "IntFlag"] = "IntEnum"
    doc: str | None = None
    members: list[LiteralEntry | RangeEntry] = Field(default_factory=list)

    @field_validator("repr", mode="before")
    @classmethod
    def _single_repr(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    def to_members(self) -> list[MemberDeclaration]:
        return [entry.to_member() for entry in self.members]

    def representation(self) -> Representation | None:
        return parse_representation(self.repr)

    def expand(self) -> ExpansionResult:
        return expand(self.to_members(), self.representation())


class DeclarationFile(BaseModel):
    """Root of a declaration file."""

    model_config = ConfigDict(extra="forbid")

    enums: list[EnumDeclaration] = Field(default_factory=list)

    def get(self, name: str) -> EnumDeclaration:
        for declaration in self.enums:
            if declaration.name == name:
                return declaration
        msg = f"No enum named '{name}' in declaration file"
        raise KeyError(msg)
