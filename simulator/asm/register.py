from enum import Enum
from typing import Optional

NUM_REGISTERS = 8


class Register(Enum):
    R0 = 0
    R1 = 1
    R2 = 2
    R3 = 3
    R4 = 4
    R5 = 5
    R6 = 6
    R7 = 7  # Side output of MUL (high word) and DIV (remainder)

    @property
    def index(self) -> int:
        return self.value

    @classmethod
    def parse_str(cls, name: str) -> 'Register | None':
        try:
            return cls[name.upper()]
        except KeyError:
            return None

    @classmethod
    def from_index(cls, index: int) -> Optional['Register']:
        if 0 <= index < NUM_REGISTERS:
            return cls(index)
        return None

    def __str__(self) -> str:
        return self.name


SIDE_REGISTER = Register.R7
