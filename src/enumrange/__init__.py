"""Expand range placeholders of integer enums into concrete members."""

__all__ = [
    "DeclarationError",
    "DeclarationFile",
    "EnumDeclaration",
    "EnumSource",
    "ExpandedMember",
    "ExpansionResult",
    "IssueCode",
    "LiteralEntry",
    "LiteralMember",
    "MemberDeclaration",
    "Range",
    "RangeCheck",
    "RangeEntry",
    "RangeMember",
    "RangeSpec",
    "Representation",
    "ValidationIssue",
    "enum_range",
    "expand",
    "expand_range",
    "export_expansion_to_toml",
    "load_declarations",
    "parse_representation",
    "render_enum",
    "render_module",
    "resolve_member_name",
    "validate_declarations",
]

from ._declaration import DeclarationFile, EnumDeclaration, LiteralEntry, RangeEntry, RangeSpec
from ._expand import expand, expand_range, resolve_member_name
from ._io import DeclarationError, export_expansion_to_toml, load_declarations
from ._models import ExpandedMember, ExpansionResult, LiteralMember, MemberDeclaration, RangeCheck, RangeMember
from ._range_enum import Range, enum_range
from ._render import EnumSource, render_enum, render_module
from ._representation import Representation, parse_representation
from ._validate import IssueCode, ValidationIssue, validate_declarations
