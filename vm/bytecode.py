__all__ = (
    "Opcode",
    "OperandType",
    "Bytecode",
    "JUMP_PLACEHOLDER",
    "get_operand_types",
    "get_instruction_length",
    "JumpTooLargeException",
    "TruncatedInstructionException",
)


import enum
import typing


class Opcode(enum.IntEnum):
    PRINT = enum.auto()

    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    MOD = enum.auto()

    EQ = enum.auto()
    GT = enum.auto()
    LT = enum.auto()
    NOT = enum.auto()
    NEGATE = enum.auto()

    CONST = enum.auto()
    STR = enum.auto()
    TRUE = enum.auto()
    FALSE = enum.auto()
    NULL = enum.auto()
    POP = enum.auto()

    SET_GLOBAL = enum.auto()
    GET_GLOBAL = enum.auto()
    DEEP_SET = enum.auto()
    DEEP_GET = enum.auto()

    JMP = enum.auto()
    JZ = enum.auto()

    FUNC = enum.auto()
    INVOKE = enum.auto()
    RET = enum.auto()

    EXIT = enum.auto()


class OperandType(enum.IntEnum):
    U8 = 1
    I16 = 2

    @property
    def width(self) -> int:
        return self.value


# -1 as a big-endian i16, i.e. the bytes 0xFF 0xFF.
JUMP_PLACEHOLDER = -1


class Bytecode:
    __slots__ = (
        "_instructions",
    )

    def __init__(self) -> None:
        self._instructions = bytearray()

    def get_next_instruction_offset(self) -> int:
        return len(self._instructions)

    def add_instruction(self, opcode: Opcode, *operands: int) -> int:
        operand_types = get_operand_types(opcode)
        assert len(operands) == len(operand_types), (opcode, operands)
        instruction_offset = len(self._instructions)
        self._instructions.append(opcode.value)

        for operand_type, operand in zip(operand_types, operands):
            if operand_type is OperandType.U8:
                assert operand in range(0, 256), (opcode, operand)
                self._instructions.append(operand)
            else:
                self._instructions.extend(operand.to_bytes(2, "big", signed = True))

        return instruction_offset

    def patch_jump(self, instruction_offset: int, delta: int) -> None:
        assert self._instructions[instruction_offset] in (Opcode.JMP, Opcode.JZ)

        if delta not in range(-0x8000, 0x8000):
            raise JumpTooLargeException()

        self._instructions[instruction_offset + 1
                           : instruction_offset + 3] = delta.to_bytes(2, "big", signed = True)

    def truncate(self, instruction_offset: int) -> None:
        del self._instructions[instruction_offset:]

    def clear(self) -> None:
        self._instructions = bytearray()

    def to_bytes(self) -> bytes:
        return bytes(self._instructions)

    def get_instructions(self, next_instruction_offset: int = 0) \
        -> typing.Iterable[typing.Tuple[int, typing.Union[Opcode, int], typing.Tuple[int, ...]]]:
        """Decode instructions starting at the given offset.

        Bytes that are not a known opcode are yielded as a bare int with no
        operands.
        """
        while next_instruction_offset < len(self._instructions):
            instruction_offset = next_instruction_offset
            byte = self._instructions[instruction_offset]

            try:
                opcode = Opcode(byte)
            except ValueError:
                next_instruction_offset += 1
                yield instruction_offset, byte, ()
                continue

            operands = []
            operand_offset = instruction_offset + 1

            for operand_type in get_operand_types(opcode):
                operand_bytes = self._instructions[operand_offset
                                                   : operand_offset + operand_type.width]

                if len(operand_bytes) < operand_type.width:
                    raise TruncatedInstructionException()

                operands.append(int.from_bytes(operand_bytes, "big"
                                               , signed = operand_type is OperandType.I16))
                operand_offset += operand_type.width

            next_instruction_offset = operand_offset
            yield instruction_offset, opcode, tuple(operands)

    def __len__(self) -> int:
        return len(self._instructions)


def get_operand_types(opcode: Opcode) -> typing.Tuple[OperandType, ...]:
    return _OPCODE_2_OPERAND_TYPES.get(opcode, ())


def get_instruction_length(opcode: Opcode) -> int:
    return 1 + sum(operand_type.width for operand_type in get_operand_types(opcode))


class JumpTooLargeException(Exception):
    pass


class TruncatedInstructionException(Exception):
    pass


_OPCODE_2_OPERAND_TYPES: typing.Dict[Opcode, typing.Tuple[OperandType, ...]] = {
    Opcode.CONST: (OperandType.U8,),
    Opcode.STR: (OperandType.U8,),
    Opcode.SET_GLOBAL: (OperandType.U8,),
    Opcode.GET_GLOBAL: (OperandType.U8,),
    Opcode.DEEP_SET: (OperandType.U8,),
    Opcode.DEEP_GET: (OperandType.U8,),
    Opcode.JMP: (OperandType.I16,),
    Opcode.JZ: (OperandType.I16,),
    Opcode.FUNC: (OperandType.U8, OperandType.U8, OperandType.U8),
    Opcode.INVOKE: (OperandType.U8, OperandType.U8),
}
