"""LC-3 Subset Simulator Core Package."""

from .bitvector import BitVector
from .computer import Computer
from .runner import run_program, RunOptions, RunResult
from .errors import (
    LC3Error,
    LoadError,
    LC3RuntimeError,
    MemoryAccessError,
    IllegalOpcode,
    IllegalTrapVector,
)

__all__ = [
    "BitVector",
    "Computer",
    "run_program",
    "RunOptions",
    "RunResult",
    "LC3Error",
    "LoadError",
    "LC3RuntimeError",
    "MemoryAccessError",
    "IllegalOpcode",
    "IllegalTrapVector",
]
