import logging
from typing import Iterable, List, Optional, Tuple

from simulator.asm import (
    Opcode, Register, Instruction, InstructionVisitor, NUM_REGISTERS, SIDE_REGISTER, wrap32
)
from simulator.parser import Parser
from . import alu
from .cpu_state import CpuState
from .execution_exception import ExecutionException, DivisionByZeroException

logger = logging.getLogger(__name__)


class Cpu:
    """
    Register machine with eight signed 32-bit registers.

    Instructions are executed one at a time against the register file; every
    executed instruction, END included, adds one to the instruction count and
    its opcode's cost to the cycle count. A Cpu object represents one run.
    """

    def __init__(self):
        self._registers: List[int] = [0] * NUM_REGISTERS
        self._cycle_count: int = 0
        self._instruction_count: int = 0
        self._state: CpuState = CpuState.RUNNING

    @property
    def registers(self) -> Tuple[int, ...]:
        return tuple(self._registers)

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    @property
    def instruction_count(self) -> int:
        return self._instruction_count

    @property
    def state(self) -> CpuState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == CpuState.RUNNING

    @property
    def cpi(self) -> Optional[float]:
        """Cycles per instruction, or None if nothing has executed yet."""
        if self._instruction_count == 0:
            return None
        return self._cycle_count / self._instruction_count

    def read_register(self, reg: Register) -> int:
        return self._registers[reg.index]

    def write_register(self, reg: Register, value: int):
        self._registers[reg.index] = wrap32(value)

    def step(self, instr: Instruction):
        """Executes a single instruction."""
        if not self.is_running:
            raise ExecutionException("CPU is halted", instr.line_number, instr.text)

        opcode = instr.opcode
        if opcode == Opcode.END:
            self._state = CpuState.HALTED
        else:
            operand = 0 if instr.operand is None else instr.operand.get_value(self._registers)
            dest = instr.dest_reg
            value = self.read_register(dest)

            if opcode == Opcode.MOV:
                self.write_register(dest, operand)
            elif opcode == Opcode.ADD:
                self.write_register(dest, alu.add(value, operand))
            elif opcode == Opcode.SUB:
                self.write_register(dest, alu.sub(value, operand))
            elif opcode == Opcode.MUL:
                low, high = alu.mul(value, operand)
                # SIDE_REGISTER is written last so it wins when it is also the destination
                self.write_register(dest, low)
                self.write_register(SIDE_REGISTER, high)
            elif opcode == Opcode.DIV:
                if operand == 0:
                    raise DivisionByZeroException("division by zero", instr.line_number, instr.text)
                quotient, remainder = alu.div(value, operand)
                self.write_register(dest, quotient)
                self.write_register(SIDE_REGISTER, remainder)
            else:
                raise ExecutionException(f"unsupported opcode {opcode.name}", instr.line_number, instr.text)

        self._instruction_count += 1
        self._cycle_count += opcode.cycles
        logger.debug("%s -> %s (cycles=%d)", instr.text, self._registers, self._cycle_count)
        if not self.is_running:
            logger.info("halted after %d instructions, %d cycles", self._instruction_count, self._cycle_count)

    def execute(self, lines: Iterable[str], visitor: Optional[InstructionVisitor] = None) -> 'Cpu':
        """
        Parses and executes instruction lines in order until END has executed.

        Each line is parsed, encoded and passed to the visitor before it runs.
        Lines following END are never parsed. Parse and execution errors abort
        the run and propagate to the caller.
        """
        if not self.is_running:
            return self
        parser = Parser()
        return self.run((parser.parse_instruction(line, line_number)
                         for line_number, line in enumerate(lines, start=1)), visitor)

    def run(self, instructions: Iterable[Instruction], visitor: Optional[InstructionVisitor] = None) -> 'Cpu':
        """Executes already parsed instructions in order until END has executed."""
        for instr in instructions:
            if visitor is not None:
                visitor.visit(instr, instr.encode())
            self.step(instr)
            if not self.is_running:
                break
        return self

    def __repr__(self) -> str:
        return (f"Cpu(registers={self._registers}, cycles={self._cycle_count}, "
                f"instructions={self._instruction_count}, state={self._state.name})")
