from abc import ABC, abstractmethod
from typing import Sequence

from .register import Register


class Operand(ABC):
    """Second argument of an instruction: a register or an immediate literal."""

    @abstractmethod
    def get_value(self, registers: Sequence[int]) -> int:
        """
        Returns the integer value of this operand.
        Register operands read the current contents of the register file.
        """
        pass

    @property
    @abstractmethod
    def is_immediate(self) -> bool:
        pass

    @abstractmethod
    def __str__(self) -> str:
        pass


class RegisterOperand(Operand):
    def __init__(self, register: Register):
        self._register = register

    @property
    def register(self) -> Register:
        return self._register

    @property
    def is_immediate(self) -> bool:
        return False

    def get_value(self, registers: Sequence[int]) -> int:
        return registers[self._register.index]

    def __eq__(self, other) -> bool:
        return isinstance(other, RegisterOperand) and other._register == self._register

    def __hash__(self) -> int:
        return hash(self._register)

    def __str__(self) -> str:
        return self._register.name

    def __repr__(self) -> str:
        return f"RegisterOperand({self._register.name})"


class Immediate(Operand):
    """A signed decimal literal."""
    def __init__(self, value: int):
        if not isinstance(value, int):
            raise TypeError("Immediate value must be int")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    @property
    def is_immediate(self) -> bool:
        return True

    def get_value(self, registers: Sequence[int]) -> int:
        return self._value

    def __eq__(self, other) -> bool:
        return isinstance(other, Immediate) and other._value == self._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"Immediate({self._value})"
