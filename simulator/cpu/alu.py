from typing import Tuple

from simulator.asm import WORD_BITS, wrap32


def add(a: int, b: int) -> int:
    return wrap32(a + b)


def sub(a: int, b: int) -> int:
    return wrap32(a - b)


def mul(a: int, b: int) -> Tuple[int, int]:
    """Full signed 64-bit product of two 32-bit values, returned as (low word, high word)."""
    product = a * b
    return wrap32(product), wrap32(product >> WORD_BITS)


def div(a: int, b: int) -> Tuple[int, int]:
    """
    Signed division truncating toward zero, returned as (quotient, remainder).
    The remainder takes the sign of the dividend. INT32_MIN / -1 wraps to INT32_MIN.
    Cpu.step rejects a zero divisor before calling this; b == 0 here raises
    ZeroDivisionError from the floor division.
    """
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    remainder = a - quotient * b
    return wrap32(quotient), wrap32(remainder)
