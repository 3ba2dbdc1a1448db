from typing import Protocol

class MachineCodeListener(Protocol):
    """Protocol for listeners receiving encoded instruction words."""
    def add(self, instr: int):
        """Adds an instruction word."""
        ...
