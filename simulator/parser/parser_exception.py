from typing import Optional


class ParserException(Exception):
    """Custom exception for parsing errors."""
    def __init__(self, message: str, line_number: int = 0, instruction: Optional[str] = None):
        super().__init__(message)
        self.line_number = line_number
        self.instruction = instruction

    def __str__(self) -> str:
        s = super().__str__()
        if self.instruction is not None:
            s = f"'{self.instruction}': {s}"
        if self.line_number > 0:
            return f"line {self.line_number}: {s}"
        return s


class InvalidOpcode(ParserException):
    pass


class InvalidRegister(ParserException):
    pass


class InvalidImmediate(ParserException):
    pass
