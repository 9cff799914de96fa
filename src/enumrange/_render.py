"""Render expanded enums as Python source code."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._models import ExpansionResult, RangeCheck
    from ._representation import Representation

HEADER = "# Generated by enumrange. Do not edit by hand."
INDENT = "    "


@dataclass(frozen=True, slots=True)
class EnumSource:
    """Everything needed to render one enum class."""

    name: str
    result: ExpansionResult
    representation: Representation | None = None
    base: str = "IntEnum"
    doc: str | None = None

    @property
    def uses_auto(self) -> bool:
        return any(member.discriminant is None for member in self.result.members)


def _render_docstring(doc: str) -> str:
    if '"""' in doc or "\\" in doc or doc.endswith('"'):
        return INDENT + repr(doc)
    return f'{INDENT}"""{doc}"""'


def _render_cast(representation: Representation) -> str:
    """Expression reinterpreting ``int(self)`` in the representation."""
    mask = hex((1 << representation.bits) - 1)
    if not representation.signed:
        return f"int(self) & {mask}"
    half = hex(1 << (representation.bits - 1))
    size = hex(1 << representation.bits)
    return f"(int(self) + {half}) % {size} - {half}"


def render_range_check(check: RangeCheck, representation: Representation) -> list[str]:
    """Render the method testing whether a member is in a range."""
    return [
        f"{INDENT}def {check.function_name}(self) -> bool:",
        f'{INDENT * 2}"""Check if the member value, as {representation}, is in [{check.start}, {check.end}]."""',
        f"{INDENT * 2}value = {_render_cast(representation)}",
        f"{INDENT * 2}return value >= {check.start} and value <= {check.end}",
    ]


def render_enum(source: EnumSource) -> str:
    """Render one enum class with its members and range checks.

    Members keep the order of the expansion. A member without a value is
    rendered as ``auto()``.
    """
    lines = [f"class {source.name}({source.base}):"]
    body: list[str] = []

    if source.doc:
        body.extend([_render_docstring(source.doc), ""])

    for member in source.result.members:
        value = "auto()" if member.discriminant is None else str(member.discriminant)
        body.append(f"{INDENT}{member.name} = {value}")

    if source.representation is not None:
        for check in source.result.checks:
            body.append("")
            body.extend(render_range_check(check, source.representation))

    if not body:
        body.append(f"{INDENT}pass")

    lines.extend(body)
    return "\n".join(lines) + "\n"


def render_module(sources: Sequence[EnumSource]) -> str:
    """Render a module defining all the given enums."""
    imported = {source.base for source in sources}
    if any(source.uses_auto for source in sources):
        imported.add("auto")
    names = sorted(imported)

    parts = [HEADER, ""]
    if names:
        parts.extend([f"from enum import {', '.join(names)}", ""])
    for source in sources:
        parts.extend(["", render_enum(source)])
    return "\n".join(parts)
