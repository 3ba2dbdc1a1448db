from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, List
from .instruction import Instruction


# Avoid circular import at runtime, only use for type hints
if TYPE_CHECKING:
    from ..parser.parser import Parser
    from .instruction_builder import InstructionBuilder


class MnemonicArguments(ABC):
    """Describes the arguments an opcode expects."""
    def __init__(self, has_dest: bool, has_operand: bool):
        self._has_dest = has_dest
        self._has_operand = has_operand

    @property
    def has_dest(self) -> bool: return self._has_dest
    @property
    def has_operand(self) -> bool: return self._has_operand

    @abstractmethod
    def format(self, i: Instruction) -> str:
        """Formats the arguments of an instruction."""
        pass

    @abstractmethod
    def parse(self, ib: 'InstructionBuilder', p: 'Parser', tokens: List[str]):
        """Parses the argument tokens using the parser and updates the instruction builder."""
        pass

    @abstractmethod
    def __str__(self) -> str:
        """String representation for documentation."""
        pass

# --- Concrete Implementations ---

class Nothing(MnemonicArguments):
    # Anything after END is ignored
    def __init__(self): super().__init__(False, False)
    def format(self, i: Instruction) -> str: return ""
    def parse(self, ib: 'InstructionBuilder', p: 'Parser', tokens: List[str]): return
    def __str__(self) -> str: return ""

class DestOperand(MnemonicArguments):
    """Rd followed by an optional register or immediate operand."""
    def __init__(self): super().__init__(True, True)

    def format(self, i: Instruction) -> str:
        if i.operand is None:
            return i.dest_reg.name
        return f"{i.dest_reg.name},{i.operand}"

    def parse(self, ib: 'InstructionBuilder', p: 'Parser', tokens: List[str]):
        if not tokens:
            raise p.make_parser_exception(f"{ib.opcode.mnemonic} needs a destination register")
        ib.set_dest(p.parse_reg(tokens[0]))
        if len(tokens) >= 2:
            ib.set_operand(p.parse_operand(tokens[1]))
        # Extra tokens are ignored

    def __str__(self) -> str: return "Rd[,Rs|const]"


MNEMONIC_ARG_LOOKUP: Dict[str, MnemonicArguments] = {
    'NOTHING': Nothing(),
    'DEST_OPERAND': DestOperand(),
}
