from typing import Optional
from .register import Register
from .opcode import Opcode
from .operand import Operand, Immediate, RegisterOperand
from .instruction import Instruction
from .instruction_exception import InstructionException

class InstructionBuilder:
    """A builder to create an Instruction with validation."""

    def __init__(self, opcode: Opcode):
        self._opcode = opcode
        self._dest: Optional[Register] = None
        self._operand: Optional[Operand] = None

    @property
    def opcode(self) -> Opcode:
        return self._opcode

    def set_dest(self, dest: Register) -> 'InstructionBuilder':
        if not self._opcode.arguments.has_dest:
            raise InstructionException(f"{self._opcode.name} needs no destination register!")
        if self._dest is not None:
            raise InstructionException(f"{self._opcode.name} destination set twice!")
        self._dest = dest
        return self

    def set_operand(self, operand: Operand) -> 'InstructionBuilder':
        if not self._opcode.arguments.has_operand:
            raise InstructionException(f"{self._opcode.name} needs no operand!")
        if self._operand is not None:
            raise InstructionException(f"{self._opcode.name} operand set twice!")
        self._operand = operand
        return self

    def set_source(self, source: Register) -> 'InstructionBuilder':
        return self.set_operand(RegisterOperand(source))

    def set_immediate(self, value: int) -> 'InstructionBuilder':
        return self.set_operand(Immediate(value))

    def build(self) -> Instruction:
        if self._opcode.arguments.has_dest and self._dest is None:
            raise InstructionException(f"{self._opcode.name} needs a destination register!")
        # The operand stays optional and reads as 0 during execution
        return Instruction(self._opcode, self._dest, self._operand)
