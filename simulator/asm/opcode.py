from enum import Enum
from typing import Optional

# Forward declaration for type hints
class MnemonicArguments: pass

# Populated lazily from mnemonic_arguments to avoid a circular import
_mnemonics = {}

OPCODE_SHIFT = 28
OPCODE_MASK = 0xF


class Opcode(Enum):
    # value (4-bit encoding), cycle cost, description, argument shape
    END = 0, 1, "Stops the simulator. No register is changed.", lambda: _mnemonics['NOTHING']
    MOV = 1, 1, "Copies the operand to register Rd.", lambda: _mnemonics['DEST_OPERAND']
    ADD = 2, 1, "Adds the operand to register Rd (32-bit wraparound).", lambda: _mnemonics['DEST_OPERAND']
    SUB = 3, 1, "Subtracts the operand from register Rd (32-bit wraparound).", lambda: _mnemonics['DEST_OPERAND']
    MUL = 4, 3, "Multiplies Rd by the operand. Rd receives the low word, R7 the high word.", lambda: _mnemonics['DEST_OPERAND']
    DIV = 5, 4, "Divides Rd by the operand. Rd receives the quotient, R7 the remainder.", lambda: _mnemonics['DEST_OPERAND']

    def __new__(cls, value, cycles=1, desc='', factory=lambda: _mnemonics['NOTHING']):
        member = object.__new__(cls)
        member._value_ = value
        member._cycles = cycles
        member._description = desc
        member._arg_factory = factory
        member._arguments = None
        return member

    @property
    def cycles(self) -> int:
        return self._cycles

    @property
    def description(self) -> str:
        return self._description

    @property
    def arguments(self) -> 'MnemonicArguments':
        # Lazy initialization of arguments
        if self._arguments is None:
            from .mnemonic_arguments import MNEMONIC_ARG_LOOKUP
            global _mnemonics
            _mnemonics = MNEMONIC_ARG_LOOKUP
            self._arguments = self._arg_factory()
        return self._arguments

    @property
    def mnemonic(self) -> str:
        return self.name.lower()

    @classmethod
    def parse_str(cls, name: str) -> Optional['Opcode']:
        try:
            return cls[name.upper()]
        except KeyError:
            return None

    def __str__(self) -> str:
        args_str = str(self.arguments)
        head = f"{self.name} {args_str}" if args_str else self.name
        return f"{head}\n\t{self.description} ({self.cycles} cycle{'s' if self.cycles != 1 else ''})"
