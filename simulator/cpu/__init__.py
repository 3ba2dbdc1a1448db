from .cpu_state import CpuState
from .execution_exception import ExecutionException, DivisionByZeroException
from .cpu import Cpu
