from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .instruction import Instruction

class InstructionVisitor(ABC):
    """Abstract base class for observers of instructions as they are processed."""
    @abstractmethod
    def visit(self, instruction: 'Instruction', encoded: int):
        """
        Visits an instruction together with its encoded 32-bit word.
        Called before the instruction is executed.
        """
        pass
