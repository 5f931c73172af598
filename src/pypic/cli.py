"""Command-line entry point: run a DSL script and write the generated .asm file."""

from __future__ import annotations

import argparse
import runpy
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from pypic.core.program import InvalidPinError, Program


class ProgramDiscoveryError(RuntimeError):
    """Raised when a script does not define exactly one usable Program."""


def _programs_in(namespace: dict[str, Any]) -> list[Program]:
    # Keyed on identity so aliases of one Program count once.
    found = {id(value): value for value in namespace.values() if isinstance(value, Program)}
    return list(found.values())


def discover_program(namespace: dict[str, Any], name: str | None = None) -> Program:
    """Find the Program a script defines.

    With ``name``, that attribute must be a Program. Otherwise the namespace
    must hold exactly one Program instance.
    """
    if name is not None:
        named = namespace.get(name)
        if not isinstance(named, Program):
            raise ProgramDiscoveryError(f"Script attribute {name!r} is not a Program object")
        return named

    programs = _programs_in(namespace)
    if len(programs) == 1:
        return programs[0]

    raise ProgramDiscoveryError(
        "Script must define exactly one Program, or name one with --program. "
        f"Found {len(programs)} Program(s)."
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pypic",
        description="Generate PIC10F202 assembly from a pypic DSL script.",
    )
    parser.add_argument("script", help="Python file that builds a Program.")
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file path (default: the script path with an .asm suffix).",
    )
    parser.add_argument(
        "--program",
        default=None,
        help="Attribute name of the Program object in the script (default: auto-detect).",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Also print the generated assembly to stdout.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    console = Console(soft_wrap=True)
    err_console = Console(stderr=True, soft_wrap=True)

    script_path = Path(args.script).expanduser().resolve()
    if not script_path.is_file():
        err_console.print(f"[bold red]Script not found:[/bold red] {escape(str(script_path))}")
        return 1

    try:
        namespace = runpy.run_path(str(script_path), run_name="__main__")
    except InvalidPinError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        return 1
    except Exception as exc:
        err_console.print(
            f"[bold red]Failed to run {escape(script_path.name)}:[/bold red] {escape(str(exc))}"
        )
        return 1

    try:
        prog = discover_program(namespace, args.program)
    except ProgramDiscoveryError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        return 1

    if not prog.finalized:
        prog.end_code()

    source = prog.text()
    output_path = Path(args.output) if args.output else script_path.with_suffix(".asm")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(source, encoding="utf-8")

    console.print(f"Wrote {escape(str(output_path))} ({len(prog.code)} lines)", highlight=False)
    if args.stdout:
        sys.stdout.write(source)
    return 0


if __name__ == "__main__":
    sys.exit(main())
