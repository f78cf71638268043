"""Traversal kernels, index arithmetic and grid layout for the Fenwick tree."""

from .bits import covered_range, lowbit, query_path, trailing_zeros, update_path
from .kernels import (
    NUMBA_KERNELS,
    PYTHON_KERNELS,
    KernelSet,
    add_inplace,
    prefix_walk,
    recompute,
    select_kernels,
)
from .layout import LayoutCell, build_layout, cell_row, highlight_for

__all__ = [
    "lowbit",
    "trailing_zeros",
    "covered_range",
    "update_path",
    "query_path",
    "KernelSet",
    "PYTHON_KERNELS",
    "NUMBA_KERNELS",
    "select_kernels",
    "add_inplace",
    "prefix_walk",
    "recompute",
    "LayoutCell",
    "build_layout",
    "cell_row",
    "highlight_for",
]
