import sys
from typing import TYPE_CHECKING, TextIO, Optional

from ..word import to_binary32

if TYPE_CHECKING:
    from simulator.cpu import Cpu


class StateFormatter:
    """Writes the final register file and the timing statistics of a run."""

    def __init__(self, out: Optional[TextIO] = None):
        self._out = out if out is not None else sys.stdout

    def write(self, cpu: 'Cpu'):
        print("\n=== Final CPU State ===", file=self._out)
        print("\nFinal Register Values:", file=self._out)
        for i, value in enumerate(cpu.registers):
            print(f"r{i} = {value} ({to_binary32(value)})", file=self._out)
        print(f"Total cycles: {cpu.cycle_count}", file=self._out)
        print(f"Instructions executed: {cpu.instruction_count}", file=self._out)
        cpi = cpu.cpi
        if cpi is not None:
            print(f"CPI (cycles per instruction): {cpi}", file=self._out)
