from .parser_exception import ParserException, InvalidOpcode, InvalidRegister, InvalidImmediate
from .parser import Parser, tokenize, collect_program, is_end_line
