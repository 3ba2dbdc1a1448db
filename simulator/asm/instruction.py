from typing import Optional
from .register import Register
from .opcode import Opcode, OPCODE_SHIFT, OPCODE_MASK
from .operand import Operand, RegisterOperand, Immediate
from .machine_code_listener import MachineCodeListener

# Bit layout of the 32-bit instruction word
DEST_SHIFT = 25
MODE_SHIFT = 24
IMMEDIATE_SHIFT = 8
SOURCE_SHIFT = 21
REG_MASK = 0x7
IMMEDIATE_MASK = 0xFFFF

MODE_REGISTER = 0
MODE_IMMEDIATE = 1


class Instruction:
    """Represents a single parsed instruction line."""

    def __init__(self, opcode: Opcode, dest_reg: Optional[Register], operand: Optional[Operand]):
        self._opcode = opcode
        self._dest_reg = dest_reg
        self._operand = operand
        self._text: Optional[str] = None
        self._line_number: int = 0

    def set_line_number(self, line_number: int) -> 'Instruction':
        self._line_number = line_number
        return self

    def set_text(self, text: str) -> 'Instruction':
        self._text = text
        return self

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def text(self) -> str:
        """The source line this instruction was parsed from, or its restatement."""
        return self._text if self._text is not None else str(self)

    @property
    def opcode(self) -> Opcode:
        return self._opcode

    @property
    def dest_reg(self) -> Optional[Register]:
        return self._dest_reg

    @property
    def operand(self) -> Optional[Operand]:
        return self._operand

    @property
    def cycles(self) -> int:
        return self._opcode.cycles

    def encode(self) -> int:
        """Returns the 32-bit instruction word. The result is for display only."""
        mcode = (self._opcode.value & OPCODE_MASK) << OPCODE_SHIFT
        if self._opcode == Opcode.END:
            return mcode

        mcode |= (self._dest_reg.index & REG_MASK) << DEST_SHIFT
        if isinstance(self._operand, Immediate):
            mcode |= MODE_IMMEDIATE << MODE_SHIFT
            mcode |= (self._operand.value & IMMEDIATE_MASK) << IMMEDIATE_SHIFT
        elif isinstance(self._operand, RegisterOperand):
            mcode |= MODE_REGISTER << MODE_SHIFT
            mcode |= (self._operand.register.index & REG_MASK) << SOURCE_SHIFT
        return mcode

    def create_machine_code(self, mc: MachineCodeListener):
        mc.add(self.encode())

    def __str__(self) -> str:
        args_str = self._opcode.arguments.format(self)
        if args_str:
            return f"{self._opcode.name} {args_str}"
        return self._opcode.name

    def __repr__(self) -> str:
        dest = self._dest_reg.name if self._dest_reg is not None else None
        return (f"Instruction(opcode={self._opcode.name}, dest={dest}, "
                f"operand={self._operand!r}, line={self._line_number})")
