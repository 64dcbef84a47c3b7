import pytest

from compiler.error import JumpTooLargeError
from compiler.source_location import SourceLocation
from vm.bytecode import *
from vm.chunk import Chunk


def test_opcodes_start_at_one():
    assert min(Opcode) == 1
    assert Opcode.PRINT == 1


def test_instruction_lengths():
    assert get_instruction_length(Opcode.ADD) == 1
    assert get_instruction_length(Opcode.CONST) == 2
    assert get_instruction_length(Opcode.DEEP_GET) == 2
    assert get_instruction_length(Opcode.JMP) == 3
    assert get_instruction_length(Opcode.JZ) == 3
    assert get_instruction_length(Opcode.INVOKE) == 3
    assert get_instruction_length(Opcode.FUNC) == 4


def test_add_instruction_encoding():
    bytecode = Bytecode()
    assert bytecode.add_instruction(Opcode.CONST, 7) == 0
    assert bytecode.add_instruction(Opcode.JMP, JUMP_PLACEHOLDER) == 2
    assert bytecode.add_instruction(Opcode.FUNC, 1, 2, 3) == 5
    assert bytecode.add_instruction(Opcode.EXIT) == 9

    assert bytecode.to_bytes() == bytes([
        Opcode.CONST, 7,
        Opcode.JMP, 0xFF, 0xFF,
        Opcode.FUNC, 1, 2, 3,
        Opcode.EXIT,
    ])


def test_patch_jump_is_big_endian_and_signed():
    bytecode = Bytecode()
    bytecode.add_instruction(Opcode.JZ, JUMP_PLACEHOLDER)
    bytecode.add_instruction(Opcode.JMP, JUMP_PLACEHOLDER)
    bytecode.patch_jump(0, 300)
    bytecode.patch_jump(3, -6)
    assert bytecode.to_bytes() == bytes([Opcode.JZ, 0x01, 0x2C, Opcode.JMP, 0xFF, 0xFA])


@pytest.mark.parametrize("delta", [-0x8000, 0x7FFF])
def test_patch_jump_limits(delta):
    bytecode = Bytecode()
    bytecode.add_instruction(Opcode.JMP, JUMP_PLACEHOLDER)
    bytecode.patch_jump(0, delta)
    _, _, operands = next(iter(bytecode.get_instructions()))
    assert operands == (delta,)


@pytest.mark.parametrize("delta", [-0x8001, 0x8000, 40000])
def test_patch_jump_too_large(delta):
    bytecode = Bytecode()
    bytecode.add_instruction(Opcode.JMP, JUMP_PLACEHOLDER)

    with pytest.raises(JumpTooLargeException):
        bytecode.patch_jump(0, delta)


def test_chunk_translates_jump_too_large():
    chunk = Chunk()
    source_location = SourceLocation("t.vn", 3, 5)
    chunk.add_instruction(source_location, Opcode.JZ, JUMP_PLACEHOLDER)

    with pytest.raises(JumpTooLargeError) as exc_info:
        chunk.patch_jump(source_location, 0, 32768)

    assert str(exc_info.value) == "t.vn:3:5: jump too large"


def test_get_instructions():
    bytecode = Bytecode()
    bytecode.add_instruction(Opcode.CONST, 0)
    bytecode.add_instruction(Opcode.JZ, -3)
    bytecode.add_instruction(Opcode.INVOKE, 4, 2)
    bytecode.add_instruction(Opcode.RET)

    assert list(bytecode.get_instructions()) == [
        (0, Opcode.CONST, (0,)),
        (2, Opcode.JZ, (-3,)),
        (5, Opcode.INVOKE, (4, 2)),
        (8, Opcode.RET, ()),
    ]

    assert list(bytecode.get_instructions(5))[0] == (5, Opcode.INVOKE, (4, 2))


def test_get_instructions_truncated():
    bytecode = Bytecode()
    bytecode.add_instruction(Opcode.INVOKE, 1, 1)
    bytecode.truncate(2)

    with pytest.raises(TruncatedInstructionException):
        list(bytecode.get_instructions())


def test_chunk_truncate_drops_source_locations():
    chunk = Chunk()
    source_location = SourceLocation("t.vn", 1, 1)
    chunk.add_instruction(source_location, Opcode.TRUE)
    chunk.add_instruction(source_location, Opcode.PRINT)
    chunk.truncate(1)
    assert chunk.code == bytes([Opcode.TRUE])
    assert chunk.get_source_location(0) == source_location
    assert chunk.get_source_location(1) is None


def test_chunk_free():
    chunk = Chunk()
    chunk.add_instruction(None, Opcode.CONST, chunk.add_constant(None, 1))
    chunk.add_string(None, "x")
    chunk.free()
    assert len(chunk) == 0
    assert chunk.constants == []
    assert chunk.strings == []


def test_chunk_get_instructions():
    chunk = Chunk()
    source_location = SourceLocation("t.vn", 1, 1)
    chunk.add_instruction(source_location, Opcode.TRUE)
    chunk.add_instruction(source_location, Opcode.JZ, 1)
    chunk.add_instruction(source_location, Opcode.EXIT)

    assert list(chunk.get_instructions()) == [
        (0, Opcode.TRUE, ()),
        (1, Opcode.JZ, (1,)),
        (4, Opcode.EXIT, ()),
    ]

    assert list(chunk.get_instructions(next_instruction_offset = 4)) == [(4, Opcode.EXIT, ())]
