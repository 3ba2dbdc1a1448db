import io
import re

from typing import TextIO, Optional, List, Iterable, Iterator, Tuple, Type, Union

from simulator.asm import (
    Opcode, Register, InstructionBuilder, Instruction, InstructionException,
    Operand, RegisterOperand, Immediate, NUM_REGISTERS, fits_int32
)
from .parser_exception import ParserException, InvalidOpcode, InvalidRegister, InvalidImmediate


COMMENT_CHAR = ';'
# Operands are separated by whitespace and/or commas: "mov r0, 10" and "mov r0,10"
TOKEN_SEPARATOR = re.compile(r'[\s,]+')
REGISTER_TOKEN = re.compile(r'[rR]([0-9]+)')
IMMEDIATE_TOKEN = re.compile(r'[+-]?[0-9]+')


def strip_comment(line: str) -> str:
    pos = line.find(COMMENT_CHAR)
    return line if pos < 0 else line[:pos]


def tokenize(line: str) -> List[str]:
    """Splits an instruction line into opcode and argument tokens."""
    return [t for t in TOKEN_SEPARATOR.split(strip_comment(line)) if t]


def is_end_line(line: str) -> bool:
    tokens = tokenize(line)
    return bool(tokens) and tokens[0].lower() == Opcode.END.mnemonic


def _significant_lines(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    """Yields (line number, stripped line) up to and including the terminating END line."""
    for line_number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not tokenize(line):
            continue
        yield line_number, line
        if is_end_line(line):
            return
    raise ParserException(f"program must be terminated by '{Opcode.END.mnemonic}'")


def collect_program(lines: Iterable[str]) -> List[str]:
    """
    Collects the instruction lines of a program.
    Lines are stripped, empty and comment-only lines are skipped, and collection
    stops at the first END line, which is included. Raises ParserException if
    the input ends without END.
    """
    return [line for _, line in _significant_lines(lines)]


class Parser:
    """Parses instruction lines into Instruction objects."""

    def __init__(self, source: Union[TextIO, str, None] = None):
        if source is None:
            self.code = ""
        elif isinstance(source, str):
            self.code = source
        else:
            self.code = source.read()

        self._line: Optional[str] = None
        self._line_number: int = 0

    def make_parser_exception(self, message: str,
                              cls: Type[ParserException] = ParserException) -> ParserException:
        """Create a parser exception for the line currently being parsed."""
        return cls(message, self._line_number, self._line)

    def parse_reg(self, token: str) -> Register:
        name = token.rstrip(',:')
        match = REGISTER_TOKEN.fullmatch(name)
        if match is None:
            raise self.make_parser_exception(f"invalid register '{token}'", InvalidRegister)
        reg = Register.from_index(int(match.group(1)))
        if reg is None:
            raise self.make_parser_exception(
                f"register '{token}' out of range r0..r{NUM_REGISTERS - 1}", InvalidRegister)
        return reg

    def parse_immediate(self, token: str) -> int:
        if IMMEDIATE_TOKEN.fullmatch(token) is None:
            raise self.make_parser_exception(f"invalid immediate '{token}'", InvalidImmediate)
        value = int(token, 10)
        if not fits_int32(value):
            raise self.make_parser_exception(f"immediate '{token}' out of 32-bit range", InvalidImmediate)
        return value

    def parse_operand(self, token: str) -> Operand:
        if token[:1].lower() == 'r':
            return RegisterOperand(self.parse_reg(token))
        return Immediate(self.parse_immediate(token))

    def parse_instruction(self, line: str, line_number: int = 0) -> Instruction:
        """Parses a single instruction line. Raises ParserException on malformed input."""
        self._line = line.strip()
        self._line_number = line_number

        tokens = tokenize(self._line)
        if not tokens:
            raise self.make_parser_exception("empty instruction")

        opcode = Opcode.parse_str(tokens[0])
        if opcode is None:
            raise self.make_parser_exception(f"unknown opcode '{tokens[0]}'", InvalidOpcode)

        ib = InstructionBuilder(opcode)
        try:
            opcode.arguments.parse(ib, self, tokens[1:])
            instr = ib.build()
        except InstructionException as e:
            raise self.make_parser_exception(str(e)) from e

        return instr.set_line_number(line_number).set_text(self._line)

    def parse_program(self) -> List[Instruction]:
        """Parses the whole source up to and including the END instruction."""
        reader = io.StringIO(self.code)
        return [self.parse_instruction(line, line_number)
                for line_number, line in _significant_lines(reader)]
