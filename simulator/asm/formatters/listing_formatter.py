from typing import TextIO

from ..instruction import Instruction
from ..instruction_visitor import InstructionVisitor
from ..word import to_binary32


class ListingFormatter(InstructionVisitor):
    """Writes one listing line per instruction: index, hex word, binary word and restatement."""

    def __init__(self, out: TextIO):
        self._out = out
        self._index = 0

    def visit(self, instruction: Instruction, encoded: int):
        print(f"{self._index:04d}  {encoded:08x}  {to_binary32(encoded)}  {instruction}", file=self._out)
        self._index += 1
