import pytest
import io
from simulator.parser import (
    Parser, ParserException, InvalidOpcode, InvalidRegister, InvalidImmediate,
    tokenize, collect_program, is_end_line
)
from simulator.asm import Opcode, Register, RegisterOperand, Immediate

def parse(line: str):
    return Parser().parse_instruction(line)

def test_tokenize():
    assert tokenize("mov r0, 10") == ["mov", "r0", "10"]
    assert tokenize("mov r0,10") == ["mov", "r0", "10"]
    assert tokenize("  ADD\tr1 ,  r2  ") == ["ADD", "r1", "r2"]
    assert tokenize("sub r0, 1 ; comment") == ["sub", "r0", "1"]
    assert tokenize("; only a comment") == []
    assert tokenize("") == []

def test_simple_mov():
    instr = parse("mov r0, 10")
    assert instr.opcode == Opcode.MOV
    assert instr.dest_reg == Register.R0
    assert instr.operand == Immediate(10)
    assert instr.text == "mov r0, 10"

def test_register_operand():
    instr = parse("ADD R1, r2")
    assert instr.opcode == Opcode.ADD
    assert instr.dest_reg == Register.R1
    assert instr.operand == RegisterOperand(Register.R2)
    assert not instr.operand.is_immediate

def test_register_trailing_colon():
    instr = parse("sub r3: r4:")
    assert instr.dest_reg == Register.R3
    assert instr.operand == RegisterOperand(Register.R4)

def test_signed_immediates():
    assert parse("sub r3, -5").operand == Immediate(-5)
    assert parse("mov r3, +7").operand == Immediate(7)
    assert parse("mov r0, -2147483648").operand == Immediate(-2147483648)
    assert parse("mov r0, 2147483647").operand.is_immediate

def test_missing_operand():
    instr = parse("add r0")
    assert instr.dest_reg == Register.R0
    assert instr.operand is None

def test_extra_tokens_ignored():
    instr = parse("mov r0, 1, 2")
    assert instr.operand == Immediate(1)

def test_end():
    instr = parse("END")
    assert instr.opcode == Opcode.END
    assert instr.dest_reg is None
    assert instr.operand is None
    assert parse("end r0, 5").opcode == Opcode.END

def test_invalid_opcode():
    with pytest.raises(InvalidOpcode, match="unknown opcode 'jmp'"):
        parse("jmp r0")

def test_invalid_register():
    with pytest.raises(InvalidRegister, match="out of range"):
        parse("mov r8, 1")
    with pytest.raises(InvalidRegister, match="out of range"):
        parse("mov r0, r9")
    with pytest.raises(InvalidRegister, match="invalid register"):
        parse("mov x0, 1")
    with pytest.raises(InvalidRegister, match="invalid register"):
        parse("mov r, 1")
    with pytest.raises(InvalidRegister):
        parse("add r0, rx")

def test_invalid_immediate():
    with pytest.raises(InvalidImmediate, match="invalid immediate"):
        parse("mov r0, 0x10")
    with pytest.raises(InvalidImmediate, match="invalid immediate"):
        parse("mov r0, 1.5")
    with pytest.raises(InvalidImmediate, match="invalid immediate"):
        parse("mov r0, abc")
    with pytest.raises(InvalidImmediate, match="out of 32-bit range"):
        parse("mov r0, 2147483648")

def test_missing_destination():
    with pytest.raises(ParserException, match="needs a destination register"):
        parse("mov")

def test_empty_line():
    with pytest.raises(ParserException, match="empty instruction"):
        parse("   ")

def test_exception_names_line_and_text():
    with pytest.raises(InvalidRegister) as excinfo:
        Parser().parse_instruction("mov r9, 1", 3)
    assert excinfo.value.line_number == 3
    assert excinfo.value.instruction == "mov r9, 1"
    assert str(excinfo.value).startswith("line 3: 'mov r9, 1': ")

def test_exception_hierarchy():
    assert issubclass(InvalidOpcode, ParserException)
    assert issubclass(InvalidRegister, ParserException)
    assert issubclass(InvalidImmediate, ParserException)

def test_is_end_line():
    assert is_end_line("end")
    assert is_end_line("  End ; done")
    assert not is_end_line("endx")
    assert not is_end_line("mov r0, 1")
    assert not is_end_line("")

def test_collect_program():
    lines = ["", "  mov r0, 1  ", "; comment", "END", "mov r1, 2"]
    assert collect_program(lines) == ["mov r0, 1", "END"]

def test_collect_program_needs_end():
    with pytest.raises(ParserException, match="terminated by 'end'"):
        collect_program(["mov r0, 1", "add r0, 2"])
    with pytest.raises(ParserException):
        collect_program(["endx"])

def test_parse_program_line_numbers():
    program = Parser("mov r0, 1\n\nadd r0, r0\nend\nmov r0, 5\n").parse_program()
    assert [i.opcode for i in program] == [Opcode.MOV, Opcode.ADD, Opcode.END]
    assert [i.line_number for i in program] == [1, 3, 4]

def test_parse_program_from_stream():
    program = Parser(io.StringIO("mul r2, 4\nend\n")).parse_program()
    assert len(program) == 2
    assert program[0].operand == Immediate(4)

def test_parse_program_reports_source_line():
    with pytest.raises(InvalidImmediate) as excinfo:
        Parser("mov r0, 1\n\nmov r1, zz\nend").parse_program()
    assert excinfo.value.line_number == 3

def test_exception_fields_set_at_construction():
    e = ParserException("bad token", 5, "mov r0, ?")
    assert e.line_number == 5
    assert e.instruction == "mov r0, ?"
    assert str(e) == "line 5: 'mov r0, ?': bad token"
    assert str(ParserException("bad token")) == "bad token"
