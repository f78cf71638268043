from __future__ import annotations

import argparse
import json
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Literal, Tuple

import numpy as np

from fenwicktrace import FenwickTree
from fenwicktrace.algo.kernels import select_kernels
from fenwicktrace.config import describe_runtime


@dataclass(frozen=True)
class BenchmarkResult:
    mode: Literal["update", "query", "rebuild"]
    kernel: str
    length: int
    operations: int
    elapsed_seconds: float
    throughput_ops_per_sec: float


def _finish(
    mode: Literal["update", "query", "rebuild"],
    tree: FenwickTree,
    operations: int,
    elapsed: float,
) -> BenchmarkResult:
    throughput = operations / elapsed if elapsed > 0 else float("inf")
    return BenchmarkResult(
        mode=mode,
        kernel=tree.kernels.name,
        length=len(tree),
        operations=operations,
        elapsed_seconds=elapsed,
        throughput_ops_per_sec=throughput,
    )


def benchmark_updates(
    *,
    length: int,
    operations: int,
    seed: int,
    kernel: str | None = None,
) -> Tuple[FenwickTree, BenchmarkResult]:
    rng = np.random.default_rng(seed)
    tree = FenwickTree(length, kernels=select_kernels(kernel))
    indices = rng.integers(0, length, size=operations)
    values = rng.integers(-1_000, 1_000, size=operations)
    start = time.perf_counter()
    for index, value in zip(indices, values):
        tree.point_update(int(index), int(value))
    elapsed = time.perf_counter() - start
    return tree, _finish("update", tree, operations, elapsed)


def benchmark_queries(
    *,
    length: int,
    operations: int,
    seed: int,
    kernel: str | None = None,
) -> Tuple[FenwickTree, BenchmarkResult]:
    rng = np.random.default_rng(seed)
    tree = FenwickTree.from_values(
        rng.integers(-1_000, 1_000, size=length), kernels=select_kernels(kernel)
    )
    lengths = rng.integers(0, length + 1, size=operations)
    start = time.perf_counter()
    for prefix in lengths:
        tree.prefix_sum(int(prefix))
    elapsed = time.perf_counter() - start
    return tree, _finish("query", tree, operations, elapsed)


def benchmark_rebuild(
    *,
    length: int,
    operations: int,
    seed: int,
    kernel: str | None = None,
) -> Tuple[FenwickTree, BenchmarkResult]:
    rng = np.random.default_rng(seed)
    tree = FenwickTree(length, kernels=select_kernels(kernel))
    values = rng.integers(-1_000, 1_000, size=length)
    start = time.perf_counter()
    for _ in range(operations):
        tree.rebuild(values)
    elapsed = time.perf_counter() - start
    return tree, _finish("rebuild", tree, operations, elapsed)


_BENCHMARKS = {
    "update": benchmark_updates,
    "query": benchmark_queries,
    "rebuild": benchmark_rebuild,
}


def _write_result_artifact(
    path: Path,
    *,
    runtime_snapshot: dict[str, Any],
    args: argparse.Namespace,
    result: BenchmarkResult,
) -> None:
    payload = {
        "timestamp": time.time(),
        **asdict(result),
        "parameters": {"seed": args.seed},
        "runtime": runtime_snapshot,
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Benchmark point update, prefix query and rebuild throughput."
    )
    parser.add_argument(
        "mode",
        choices=tuple(_BENCHMARKS),
        help="Operation to benchmark.",
    )
    parser.add_argument(
        "--length",
        type=int,
        default=1024,
        help="Number of elements in the tree.",
    )
    parser.add_argument(
        "--operations",
        type=int,
        default=10_000,
        help="Number of operations to execute.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for generated indices and values.",
    )
    parser.add_argument(
        "--kernel",
        choices=("python", "numba"),
        default=None,
        help="Kernel set to use (defaults to FENWICKTRACE_ENABLE_NUMBA).",
    )
    parser.add_argument(
        "--log-json",
        type=str,
        default="",
        help="Optional path to write a JSON summary for the run.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    runtime_snapshot = describe_runtime()
    benchmark = _BENCHMARKS[args.mode]
    _, result = benchmark(
        length=args.length,
        operations=args.operations,
        seed=args.seed,
        kernel=args.kernel,
    )

    print(
        f"{result.mode} | kernel={result.kernel} "
        f"length={result.length} "
        f"ops={result.operations} "
        f"time={result.elapsed_seconds:.4f}s "
        f"throughput={result.throughput_ops_per_sec:,.1f} ops/s"
    )
    if args.log_json:
        log_path = Path(args.log_json)
        _write_result_artifact(
            log_path,
            runtime_snapshot=runtime_snapshot,
            args=args,
            result=result,
        )
        print(f"[point_ops] wrote summary to {log_path}")


if __name__ == "__main__":
    main()
