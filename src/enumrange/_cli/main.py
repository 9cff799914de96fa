import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from enumrange._declaration import DeclarationFile, EnumDeclaration
from enumrange._io import (
    DeclarationError,
    declaration_json_schema,
    dump_sample_declaration,
    export_expansion_to_toml,
    load_declarations,
)
from enumrange._models import ExpansionResult
from enumrange._render import EnumSource, render_module
from enumrange._validate import ValidationIssue, validate_declarations

from .config import ConfigError, EnumRangeConfig, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Expand range placeholders of enum declarations."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> EnumRangeConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load_declarations(path: Path | None, config: EnumRangeConfig) -> DeclarationFile:
    """Load the declaration file given on the command line or in the config."""
    effective_path = path if path is not None else config.input
    if effective_path is None:
        err_console.print(
            "[red]Error: Declaration file required. Pass a path or configure \\[tool.enumrange].input[/red]",
        )
        raise typer.Exit(code=1)

    err_console.print(f"[cyan]Loading declarations from:[/cyan] {effective_path}")
    try:
        declarations = load_declarations(effective_path)
    except FileNotFoundError as e:
        err_console.print(f"[red]Error: Declaration file not found: {effective_path}[/red]")
        raise typer.Exit(code=1) from e
    except DeclarationError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    return declarations


def _select(declarations: DeclarationFile, enum_name: str | None) -> list[EnumDeclaration]:
    if enum_name is None:
        return list(declarations.enums)
    try:
        return [declarations.get(enum_name)]
    except KeyError as e:
        err_console.print(f"[red]Error: No enum named '{escape(enum_name)}' in declaration file[/red]")
        raise typer.Exit(code=1) from e


def _collect_issues(selected: list[EnumDeclaration]) -> list[tuple[str, ValidationIssue]]:
    return [
        (declaration.name, issue)
        for declaration in selected
        for issue in validate_declarations(declaration.to_members(), declaration.representation())
    ]


def _print_issues(issues: list[tuple[str, ValidationIssue]]) -> None:
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Enum", style="bold")
    table.add_column("Member", style="dim")
    table.add_column("Issue", style="yellow")
    table.add_column("Message")

    for enum_name, issue in issues:
        table.add_row(escape(enum_name), escape(issue.member), str(issue.code), escape(issue.message))

    err_console.print(Panel(table, title="[bold]Declaration Issues[/bold]", border_style="yellow"))
    err_console.print()


def _expansion_table(declaration: EnumDeclaration, result: ExpansionResult) -> Panel:
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Member", style="bold")
    table.add_column("Value", justify="right", style="yellow")
    table.add_column("From range", style="dim")

    for member in result.members:
        value = "auto" if member.discriminant is None else str(member.discriminant)
        table.add_row(escape(member.name), value, escape(member.origin or ""))

    checks = ", ".join(f"{check.function_name} [{check.start}, {check.end}]" for check in result.checks)
    representation = declaration.representation()
    return Panel(
        table,
        title=f"[bold]{escape(declaration.name)}[/bold]",
        subtitle=f"[dim]repr: {representation or 'none'}; checks: {escape(checks) or 'none'}[/dim]",
        border_style="cyan",
    )


@app.command()
def expand(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to the TOML declaration file (defaults to [tool.enumrange].input)"),
    ] = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Write the expanded enums to this TOML file instead of printing them"),
    ] = None,
    enum_name: Annotated[
        str | None,
        typer.Option("--enum", help="Only expand the enum with this name"),
    ] = None,
) -> None:
    """Expand every range of the declared enums and show the resulting members."""
    err_console.print()
    config = _load_config()
    declarations = _load_declarations(path, config)
    selected = _select(declarations, enum_name)

    err_console.print("[cyan]Expanding ranges...[/cyan]")
    expansions = [(declaration, declaration.expand()) for declaration in selected]
    err_console.print()

    if output is not None:
        err_console.print(f"[cyan]Exporting expansion to:[/cyan] {output}")
        export_expansion_to_toml(expansions, output)
    else:
        for declaration, result in expansions:
            out_console.print(_expansion_table(declaration, result))

    err_console.print()
    err_console.print("[green]✓ Expansion complete[/green]")
    err_console.print()


@app.command()
def generate(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to the TOML declaration file (defaults to [tool.enumrange].input)"),
    ] = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to the Python module to write (defaults to [tool.enumrange].output)"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Refuse to generate code if the declarations have issues"),
    ] = False,
) -> None:
    """Generate a Python module defining the expanded enums."""
    err_console.print()
    config = _load_config()
    declarations = _load_declarations(path, config)
    effective_output = output if output is not None else config.output

    issues = _collect_issues(list(declarations.enums))
    if issues:
        _print_issues(issues)
        if strict or config.strict:
            err_console.print("[red]✗ Declarations have issues, nothing generated[/red]")
            raise typer.Exit(code=1)

    sources = [
        EnumSource(
            name=declaration.name,
            result=declaration.expand(),
            representation=declaration.representation(),
            base=declaration.base,
            doc=declaration.doc,
        )
        for declaration in declarations.enums
    ]
    module_source = render_module(sources)
    logger.debug(f"Rendered {len(sources)} enum(s)")

    if effective_output is None:
        typer.echo(module_source, nl=False)
        return

    err_console.print(f"[cyan]Writing module to:[/cyan] {effective_output}")
    effective_output.parent.mkdir(parents=True, exist_ok=True)
    effective_output.write_text(module_source)

    err_console.print()
    err_console.print("[green]✓ Module generated[/green]")
    err_console.print()


@app.command()
def check(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to the TOML declaration file (defaults to [tool.enumrange].input)"),
    ] = None,
    *,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit non-zero if any issue is found"),
    ] = False,
) -> None:
    """Check the declarations for inverted ranges, name collisions and similar issues."""
    err_console.print()
    config = _load_config()
    declarations = _load_declarations(path, config)
    err_console.print()

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Enum", style="bold")
    table.add_column("Repr")
    table.add_column("Declared", justify="right", style="yellow")
    table.add_column("Expanded", justify="right", style="yellow")
    table.add_column("Checks", justify="right", style="green")

    for declaration in declarations.enums:
        result = declaration.expand()
        table.add_row(
            escape(declaration.name),
            str(declaration.representation() or "-"),
            str(len(declaration.members)),
            str(len(result.members)),
            str(len(result.checks)),
        )

    err_console.print(
        Panel(
            table,
            title="[bold]Declarations[/bold]",
            subtitle=f"[dim]{len(declarations.enums)} enums[/dim]",
            border_style="cyan",
        ),
    )
    err_console.print()

    issues = _collect_issues(list(declarations.enums))
    if not issues:
        err_console.print("[green]✓ Declarations are valid[/green]")
        err_console.print()
        return

    _print_issues(issues)
    if strict or config.strict:
        err_console.print(f"[red]✗ {len(issues)} issue(s) found[/red]")
        raise typer.Exit(code=1)
    err_console.print(f"[yellow]⚠ {len(issues)} issue(s) found[/yellow]")
    err_console.print()


@app.command()
def schema(
    *,
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Path to output JSON schema file"),
    ],
    indent: Annotated[
        int,
        typer.Option("--indent", help="JSON indentation spaces"),
    ] = 2,
) -> None:
    """Generate the JSON schema of declaration files."""
    err_console.print()
    err_console.print("[cyan]Generating declaration JSON schema...[/cyan]")

    err_console.print(f"[cyan]Writing schema to:[/cyan] {output}")
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w") as f:
        json.dump(declaration_json_schema(), f, indent=indent)

    err_console.print()
    err_console.print("[green]✓ Schema generation complete[/green]")
    err_console.print()


@app.command()
def init(
    *,
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ],
) -> None:
    """Generate a sample declaration file."""
    err_console.print()
    err_console.print(f"[cyan]Writing sample declarations to:[/cyan] {output}")
    dump_sample_declaration(output)

    err_console.print()
    err_console.print("[green]✓ Sample declaration file generated[/green]")
    err_console.print()


def main() -> None:
    app()
