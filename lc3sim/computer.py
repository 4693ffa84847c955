"""Fetch-decode-execute engine for the LC-3 simulator."""

import logging
from typing import Optional

from .bitvector import BitVector
from .cpu import CPU
from .display import format_state
from .errors import LoadError, LC3RuntimeError, MachineHalted
from .instructions import (
    OutputBuffer,
    OutputSink,
    decode,
    disassemble,
    execute_instruction,
)
from .loader import validate_words

logger = logging.getLogger(__name__)


class Computer:
    """A machine with registers, memory, PC, IR and condition codes.

    Programs are loaded once with `load_machine_code` and then run with
    `execute` (to completion) or `step` (one instruction at a time). All
    accessors return copies; the only mutation paths are loading and
    execution. A fatal error ends the run; later steps raise `MachineHalted`.
    """

    def __init__(self, output: Optional[OutputSink] = None):
        self._cpu = CPU()
        self.output = output if output is not None else OutputBuffer()
        self._loaded = False
        self.steps_executed = 0
        self.fault: Optional[LC3RuntimeError] = None

    # State accessors

    def get_registers(self) -> list[BitVector]:
        return self._cpu.registers.snapshot()

    def get_memory(self) -> list[BitVector]:
        return self._cpu.memory.snapshot()

    def get_pc(self) -> int:
        return self._cpu.pc

    def get_ir(self) -> BitVector:
        return self._cpu.ir.copy()

    def get_cc(self) -> BitVector:
        return self._cpu.cc.bits

    @property
    def halted(self) -> bool:
        return self._cpu.halted

    @property
    def faulted(self) -> bool:
        return self.fault is not None

    def get_state(self) -> dict:
        """Get current machine state as dictionary."""
        return self._cpu.get_state()

    def get_watched(self, addresses: list[int]) -> dict[str, int]:
        return self._cpu.memory.get_watched(addresses)

    # Loading

    def load_machine_code(self, *words: str) -> None:
        """Load a program of 16-bit words into memory starting at address 0.

        Every word is validated before any is written, so a rejected program
        leaves memory untouched.
        """
        if self._loaded:
            raise LoadError("A program is already loaded")
        program = validate_words(words)
        for addr, word in enumerate(program):
            self._cpu.memory.write(addr, word)
        self._loaded = True
        logger.info("Loaded %d words", len(program))

    # Execution

    def step(self) -> bool:
        """Fetch, decode and execute one instruction.

        Returns:
            True if the machine halted on this instruction
        """
        cpu = self._cpu
        if cpu.halted:
            raise MachineHalted("Machine is halted", step=self.steps_executed, addr=cpu.pc)
        if self.fault is not None:
            raise MachineHalted(
                f"Machine stopped after fatal error: {self.fault.message}",
                step=self.steps_executed,
                addr=cpu.pc,
            )

        try:
            cpu.ir = cpu.memory.read(cpu.pc)
            cpu.pc += 1
            instr = decode(cpu.ir, cpu.pc)
            logger.debug("PC=%d %s", cpu.pc - 1, disassemble(cpu.ir))
            new_pc = execute_instruction(instr, cpu, self.output)
        except LC3RuntimeError as e:
            e.step = self.steps_executed + 1
            self.fault = e
            logger.warning("Execution aborted: %s", e.message)
            raise

        if new_pc is not None:
            cpu.pc = new_pc
        self.steps_executed += 1

        if cpu.halted:
            logger.info("Halted after %d steps", self.steps_executed)
        return cpu.halted

    def execute(self) -> None:
        """Run from the current PC until HALT or a fatal error."""
        while not self.step():
            pass

    def display(self) -> str:
        """Render the machine state as text."""
        return format_state(self)
