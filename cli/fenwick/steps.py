from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from fenwicktrace import FenwickTree

_ARITY = {
    "set": 2,
    "sum": 1,
    "resize": 1,
    "rebuild": 0,
}


class StepError(ValueError):
    """Raised for replay steps that cannot be parsed."""


@dataclass(frozen=True)
class Step:
    op: str
    args: Tuple[int, ...] = ()

    def __str__(self) -> str:
        return " ".join([self.op, *(str(arg) for arg in self.args)])


def parse_step(text: str) -> Step:
    """Parse ``"set 2 5"``, ``"sum 4"``, ``"resize 6"`` or ``"rebuild"``.

    Colons are accepted as separators too (``"set:2:5"``).
    """

    tokens = text.replace(":", " ").split()
    if not tokens:
        raise StepError("Empty step.")
    op = tokens[0].lower()
    if op not in _ARITY:
        raise StepError(f"Unknown step '{tokens[0]}'. Expected one of {sorted(_ARITY)}.")
    raw_args = tokens[1:]
    if len(raw_args) != _ARITY[op]:
        raise StepError(f"Step '{op}' takes {_ARITY[op]} argument(s), got {len(raw_args)}.")
    try:
        args = tuple(int(raw) for raw in raw_args)
    except ValueError as exc:
        raise StepError(f"Step '{text}' has a non-integer argument.") from exc
    return Step(op=op, args=args)


def parse_values(raw: str) -> List[int]:
    parts = [part.strip() for part in raw.split(",") if part.strip()]
    if not parts:
        raise StepError("--values needs at least one integer.")
    try:
        return [int(part) for part in parts]
    except ValueError as exc:
        raise StepError(f"Invalid --values '{raw}'.") from exc


def apply_step(tree: FenwickTree, step: Step) -> None:
    if step.op == "set":
        tree.set_value(*step.args)
    elif step.op == "sum":
        tree.query_sum(*step.args)
    elif step.op == "resize":
        tree.resize(*step.args)
    else:
        tree.rebuild(tree.values)


__all__ = ["Step", "StepError", "parse_step", "parse_values", "apply_step"]
