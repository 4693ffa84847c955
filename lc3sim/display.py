"""Human-readable dump of machine state."""

from .bitvector import BitVector
from .instructions import disassemble
from .memory import WORD_BITS

CELLS_PER_ROW = 3


def _word(value: int) -> BitVector:
    word = BitVector(WORD_BITS)
    word.set_signed_value(value)
    return word


def _rows(cells: list[str]) -> list[str]:
    return [
        "   ".join(cells[i:i + CELLS_PER_ROW])
        for i in range(0, len(cells), CELLS_PER_ROW)
    ]


def format_state(computer) -> str:
    """Format PC, IR, CC, registers and memory, three cells per row."""
    ir = computer.get_ir()
    lines = [
        f"PC {_word(computer.get_pc()).format(grouped=True)}   "
        f"IR {ir.format(grouped=True)}   "
        f"CC {computer.get_cc()}   ({disassemble(ir)})",
        "",
    ]
    lines.extend(_rows([
        f"R{i} {reg.format(grouped=True)}"
        for i, reg in enumerate(computer.get_registers())
    ]))
    lines.append("")
    lines.extend(_rows([
        f"{addr:3d} {word.format(grouped=True)}"
        for addr, word in enumerate(computer.get_memory())
    ]))
    return "\n".join(lines) + "\n"
