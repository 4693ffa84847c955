"""Program runner with tracing for the LC-3 simulator."""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from .computer import Computer
from .errors import LC3Error, StepLimitExceeded, ErrorInfo
from .instructions import OutputBuffer, disassemble
from .loader import parse_machine_code


@dataclass
class RunOptions:
    """Options for program execution."""
    max_steps: int = 10000
    trace: bool = True
    trace_watch: list[int] = field(default_factory=list)
    trace_include_registers: bool = True


@dataclass
class TraceRow:
    """Single row of execution trace."""
    step: int
    addr: int
    instr_text: str
    pc: int
    cc: str
    mem: dict[str, int]
    registers: Optional[list[int]] = None
    out_code: Optional[int] = None

    def to_dict(self, include_registers: bool) -> dict:
        result = {
            "step": self.step,
            "addr": self.addr,
            "instr_text": self.instr_text,
            "pc": self.pc,
            "cc": self.cc,
            "mem": self.mem,
        }
        if include_registers:
            result["registers"] = self.registers
        result["out_code"] = self.out_code
        return result


@dataclass
class RunResult:
    """Result of program execution."""
    status: str  # "ok" | "error"
    output_text: str
    steps_executed: int
    final_state: dict
    trace_watch: list[int]
    trace: list[dict]
    error: Optional[ErrorInfo] = None

    def to_dict(self) -> dict:
        result = {
            "status": self.status,
            "output_text": self.output_text,
            "steps_executed": self.steps_executed,
            "final_state": self.final_state,
            "trace_watch": self.trace_watch,
            "trace": self.trace,
        }
        if self.error:
            result["error"] = self.error.to_dict()
        return result


def run_program(
    program: Union[str, Sequence[str]],
    options: Optional[RunOptions] = None,
) -> RunResult:
    """Load and run a machine code program.

    Args:
        program: Program text (one word per line) or a sequence of words
        options: Execution options

    Returns:
        RunResult with execution status, output, and trace
    """
    if options is None:
        options = RunOptions()

    trace_rows: list[dict] = []
    output = OutputBuffer()
    computer = Computer(output=output)
    trace_watch = sorted(set(options.trace_watch))

    # Load program
    try:
        if isinstance(program, str):
            words = parse_machine_code(program)
        else:
            words = list(program)
        computer.load_machine_code(*words)
    except LC3Error as e:
        return RunResult(
            status="error",
            output_text="",
            steps_executed=0,
            final_state=computer.get_state(),
            trace_watch=trace_watch,
            trace=[],
            error=e.to_error_info(),
        )

    error_info: Optional[ErrorInfo] = None

    try:
        while not computer.halted and computer.steps_executed < options.max_steps:
            instr_addr = computer.get_pc()
            output.reset_io_codes()

            computer.step()

            if options.trace:
                row = TraceRow(
                    step=computer.steps_executed,
                    addr=instr_addr,
                    instr_text=disassemble(computer.get_ir()),
                    pc=computer.get_pc(),
                    cc=str(computer.get_cc()),
                    mem=computer.get_watched(trace_watch),
                    registers=computer.get_state()["registers"],
                    out_code=output.last_out_code,
                )
                trace_rows.append(row.to_dict(
                    include_registers=options.trace_include_registers,
                ))

        # Check step limit
        if not computer.halted:
            raise StepLimitExceeded(
                f"Step limit exceeded: {options.max_steps}",
                step=computer.steps_executed,
                addr=computer.get_pc(),
            )

    except LC3Error as e:
        error_info = e.to_error_info()

    return RunResult(
        status="ok" if error_info is None else "error",
        output_text=output.get_output(),
        steps_executed=computer.steps_executed,
        final_state=computer.get_state(),
        trace_watch=trace_watch,
        trace=trace_rows,
        error=error_info,
    )
