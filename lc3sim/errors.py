"""Custom exceptions for the LC-3 simulator."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorInfo:
    """Structured error information for API responses."""
    type: str
    message: str
    step: int
    addr: int
    source_line_no: Optional[int] = None
    source_text: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "message": self.message,
            "step": self.step,
            "addr": self.addr,
            "source_line_no": self.source_line_no,
            "source_text": self.source_text,
        }


class LC3Error(Exception):
    """Base exception for all simulator errors."""

    def __init__(
        self,
        message: str,
        step: int = 0,
        addr: int = 0,
        source_line_no: Optional[int] = None,
        source_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.step = step
        self.addr = addr
        self.source_line_no = source_line_no
        self.source_text = source_text

    def to_error_info(self) -> ErrorInfo:
        return ErrorInfo(
            type=self.__class__.__name__,
            message=self.message,
            step=self.step,
            addr=self.addr,
            source_line_no=self.source_line_no,
            source_text=self.source_text,
        )


class LoadError(LC3Error):
    """Program could not be loaded into memory."""
    pass


class LC3RuntimeError(LC3Error):
    """Error during program execution."""
    pass


class MemoryAccessError(LC3RuntimeError):
    """Memory address out of bounds."""
    pass


class IllegalOpcode(LC3RuntimeError):
    """Decoded opcode is not part of the instruction set."""

    def __init__(self, opcode: int, pc: int, **kwargs):
        super().__init__(f"Illegal opcode {opcode} (PC={pc})", addr=pc, **kwargs)
        self.opcode = opcode
        self.pc = pc


class IllegalTrapVector(LC3RuntimeError):
    """TRAP executed with a vector that has no service routine."""

    def __init__(self, vector: int, pc: int, **kwargs):
        super().__init__(
            f"Illegal trap vector x{vector:02X} (PC={pc})", addr=pc, **kwargs
        )
        self.vector = vector
        self.pc = pc


class MachineHalted(LC3RuntimeError):
    """Step requested after the machine halted."""
    pass


class StepLimitExceeded(LC3RuntimeError):
    """Maximum step count exceeded."""
    pass
