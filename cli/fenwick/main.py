from __future__ import annotations

import json
from typing import List, Optional

import typer

from fenwicktrace import FenwickError, FenwickTree
from fenwicktrace.config import describe_runtime
from fenwicktrace.logging import get_logger

from .render import describe_trace, render_grid
from .steps import StepError, apply_step, parse_step, parse_values

LOGGER = get_logger("cli")

_HELP = """Fenwick tree command line interface.

Replay updates and prefix-sum queries and inspect which aggregate cells each one visits."""

app = typer.Typer(
    add_completion=False,
    pretty_exceptions_enable=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    help=_HELP,
)


def _fail(message: str) -> None:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=2)


@app.callback()
def fenwick_callback() -> None:
    """Root callback reserved for shared options (none yet)."""
    pass


@app.command("layout")
def layout_command(
    length: int = typer.Option(8, "--length", "-n", help="Number of elements."),
) -> None:
    """Print the aggregate grid for an all-zero array."""

    try:
        tree = FenwickTree(length)
    except FenwickError as exc:
        _fail(str(exc))
    typer.echo(render_grid(tree.state))


@app.command("replay")
def replay_command(
    steps: Optional[List[str]] = typer.Argument(
        None, help="Steps such as 'set 2 5', 'sum 4', 'resize 6' or 'rebuild'."
    ),
    values: str = typer.Option("0", "--values", help="Comma-separated initial values."),
    output_format: str = typer.Option("text", "--format", help="Output format: text or json."),
) -> None:
    """Apply steps to a tree and print its state after each one."""

    if output_format not in {"text", "json"}:
        _fail(f"Unsupported format '{output_format}'. Expected 'text' or 'json'.")
    try:
        initial = parse_values(values)
        parsed = [parse_step(step) for step in steps or []]
        tree = FenwickTree.from_values(initial)
    except (StepError, FenwickError, OverflowError) as exc:
        _fail(str(exc))

    records = [("init", tree.state)]
    for step in parsed:
        try:
            apply_step(tree, step)
        except (FenwickError, OverflowError) as exc:
            _fail(f"step '{step}': {exc}")
        LOGGER.debug("Applied %s -> %s", step, tree.trace)
        records.append((str(step), tree.state))

    if output_format == "json":
        payload = {
            "runtime": describe_runtime(),
            "steps": [{"step": label, **state.materialise()} for label, state in records],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    for label, state in records:
        typer.echo(f"== {label} ({describe_trace(state)})")
        typer.echo(render_grid(state))
        typer.echo(f"sum={state.last_sum}")


def main() -> None:
    app()


__all__ = ["app", "main"]
