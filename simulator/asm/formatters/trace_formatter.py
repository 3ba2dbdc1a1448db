import sys
from typing import TextIO, Optional

from ..instruction import Instruction
from ..instruction_visitor import InstructionVisitor
from ..word import to_binary32


class TraceFormatter(InstructionVisitor):
    """Prints every instruction before it executes: source text, restatement and encoded word."""

    def __init__(self, out: Optional[TextIO] = None):
        self._out = out if out is not None else sys.stdout

    def visit(self, instruction: Instruction, encoded: int):
        print(f"\nExecuting: {instruction.text}", file=self._out)
        print(f"    Decoded: {instruction}", file=self._out)
        print(f"    Encoded: [{to_binary32(encoded)}]", file=self._out)
