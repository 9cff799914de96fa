from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w
import tomlkit
from pydantic import ValidationError

from ._declaration import DeclarationFile, EnumDeclaration

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._models import ExpansionResult

logger = logging.getLogger(__name__)

SAMPLE_DECLARATION: dict[str, Any] = {
    "enums": [
        {
            "name": "RangedEnum",
            "repr": "u16",
            "doc": "Example enum with reserved value ranges.",
            "members": [
                {"name": "Zero", "value": 0},
                {"name": "One", "value": 1},
                {
                    "name": "PrivateUse",
                    "range": {
                        "start": 10,
                        "end": 20,
                        "format": "PrivateUse{index}_{value}",
                        "range_check": "is_private_use",
                    },
                },
                {"name": "Three", "value": 3},
                {
                    "name": "WellKnown",
                    "range": {"start": 206, "end": 210, "format": "WellKnown{index}", "range_check": "is_well_known"},
                },
                {"name": "Mdr", "value": 400},
            ],
        },
    ],
}


class DeclarationError(Exception):
    """Error in a declaration file."""


def toml_to_declarations(toml_contents: dict[str, Any], source: str = "<toml>") -> DeclarationFile:
    """Validate parsed TOML contents as a declaration file.

    Raises:
        DeclarationError: If the contents do not match the declaration schema.

    """
    try:
        return DeclarationFile.model_validate(toml_contents)
    except ValidationError as e:
        msg = f"Invalid declaration in {source}: {e}"
        raise DeclarationError(msg) from e


def load_declarations(input_path: Path | str) -> DeclarationFile:
    """Load and validate a TOML declaration file.

    Args:
        input_path: Path to the declaration file

    Returns:
        The validated DeclarationFile

    Raises:
        DeclarationError: If the file is not valid TOML or does not match the schema.

    """
    input_path = Path(input_path)

    with input_path.open("rb") as f:
        try:
            toml_contents = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {input_path}: {e}"
            raise DeclarationError(msg) from e

    declarations = toml_to_declarations(toml_contents, source=str(input_path))
    logger.debug(f"Loaded {len(declarations.enums)} enum declaration(s) from {input_path}")
    return declarations


def expansion_to_toml_document(
    expansions: Sequence[tuple[EnumDeclaration, ExpansionResult]],
) -> tomlkit.TOMLDocument:
    """Build a TOML document describing expanded enums.

    Members produced by a range carry an ``origin`` key naming the range.
    Members without a value (next available value) are written without ``value``.
    """
    doc = tomlkit.document()
    doc.add(tomlkit.comment("Generated by enumrange. Do not edit by hand."))

    enums = tomlkit.aot()
    for declaration, result in expansions:
        table = tomlkit.table()
        table["name"] = declaration.name
        representation = declaration.representation()
        if representation is not None:
            table["repr"] = str(representation)

        members = tomlkit.aot()
        for member in result.members:
            member_table = tomlkit.table()
            member_table["name"] = member.name
            if member.discriminant is not None:
                member_table["value"] = member.discriminant
            if member.origin is not None:
                member_table["origin"] = member.origin
            members.append(member_table)
        table["members"] = members

        if result.checks:
            checks = tomlkit.aot()
            for check in result.checks:
                check_table = tomlkit.table()
                check_table["name"] = check.function_name
                check_table["start"] = check.start
                check_table["end"] = check.end
                checks.append(check_table)
            table["checks"] = checks

        enums.append(table)

    doc["enums"] = enums
    return doc


def export_expansion_to_toml(
    expansions: Sequence[tuple[EnumDeclaration, ExpansionResult]],
    output_path: Path | str,
) -> None:
    """Write expanded enums to a TOML file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(tomlkit.dumps(expansion_to_toml_document(expansions)))
    logger.debug(f"Exported {len(expansions)} expanded enum(s) to {output_path}")


def dump_sample_declaration(output_path: Path | str) -> None:
    """Write a sample declaration file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as f:
        tomli_w.dump(SAMPLE_DECLARATION, f)


def declaration_json_schema() -> dict[str, Any]:
    """JSON schema of the declaration file format."""
    return DeclarationFile.model_json_schema()
