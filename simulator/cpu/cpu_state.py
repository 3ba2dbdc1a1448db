from enum import Enum, auto


class CpuState(Enum):
    RUNNING = auto()
    HALTED = auto()
