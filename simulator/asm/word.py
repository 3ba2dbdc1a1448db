"""Helpers for the machine's 32-bit two's-complement word."""

WORD_BITS = 32
WORD_MASK = (1 << WORD_BITS) - 1
SIGN_BIT = 1 << (WORD_BITS - 1)
INT32_MIN = -SIGN_BIT
INT32_MAX = SIGN_BIT - 1

def wrap32(value: int) -> int:
    """Reduces an arbitrary integer to a signed 32-bit value (two's-complement wraparound)."""
    value &= WORD_MASK
    return value - (1 << WORD_BITS) if value & SIGN_BIT else value

def to_binary32(value: int) -> str:
    """Renders the low 32 bits of value as a zero-padded binary string."""
    return f"{value & WORD_MASK:0{WORD_BITS}b}"

def fits_int32(value: int) -> bool:
    return INT32_MIN <= value <= INT32_MAX
