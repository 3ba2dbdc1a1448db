from simulator.asm import (
    Register, NUM_REGISTERS, SIDE_REGISTER, INT32_MIN, INT32_MAX,
    wrap32, to_binary32, fits_int32
)

def test_register_file_size():
    assert NUM_REGISTERS == 8
    assert len(Register) == NUM_REGISTERS
    assert SIDE_REGISTER == Register.R7

def test_parse_str():
    assert Register.parse_str("r3") == Register.R3
    assert Register.parse_str("R7") == Register.R7
    assert Register.parse_str("r8") is None
    assert Register.parse_str("sp") is None

def test_from_index():
    assert Register.from_index(0) == Register.R0
    assert Register.from_index(7).index == 7
    assert Register.from_index(8) is None
    assert Register.from_index(-1) is None

def test_wrap32():
    assert wrap32(INT32_MAX + 1) == INT32_MIN
    assert wrap32(INT32_MIN - 1) == INT32_MAX
    assert wrap32(1 << 32) == 0
    assert wrap32(0xFFFFFFFF) == -1
    assert wrap32(-5) == -5

def test_to_binary32():
    assert to_binary32(-1) == "1" * 32
    assert to_binary32(5) == "0" * 29 + "101"
    assert to_binary32(INT32_MIN) == "1" + "0" * 31
    assert len(to_binary32(0)) == 32

def test_fits_int32():
    assert fits_int32(INT32_MAX)
    assert fits_int32(INT32_MIN)
    assert not fits_int32(INT32_MAX + 1)
    assert not fits_int32(INT32_MIN - 1)
