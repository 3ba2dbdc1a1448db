from .opcode import Opcode

from .instruction_exception import InstructionException

from .register import Register, NUM_REGISTERS, SIDE_REGISTER

from .operand import Operand, RegisterOperand, Immediate

from .mnemonic_arguments import MnemonicArguments, MNEMONIC_ARG_LOOKUP

from .instruction_builder import InstructionBuilder

from .instruction import Instruction

from .instruction_visitor import InstructionVisitor

from .machine_code_listener import MachineCodeListener

from .word import WORD_BITS, WORD_MASK, INT32_MIN, INT32_MAX, wrap32, to_binary32, fits_int32

from .formatters.trace_formatter import TraceFormatter
from .formatters.state_formatter import StateFormatter
from .formatters.listing_formatter import ListingFormatter
