__all__ = (
    "Chunk",
    "SourceLocation",
)


import typing

from .bytecode import *
from .constant import *
from compiler.error import ConstantPoolTooLargeError, StringPoolTooLargeError, JumpTooLargeError
from compiler.source_location import SourceLocation


class Chunk:
    """A bytecode buffer together with its constant pool and string pool.

    The chunk also remembers the source location of every instruction it was
    given, which is what runtime stack traces and the disassembler print.
    """

    __slots__ = (
        "_bytecode",
        "_constant_table",
        "_string_table",
        "_instruction_offset_2_source_location",
    )

    def __init__(self, max_pool_size: int = MAX_POOL_SIZE) -> None:
        self._bytecode = Bytecode()
        self._constant_table = ConstantTable(max_pool_size)
        self._string_table = ConstantTable(max_pool_size)
        self._instruction_offset_2_source_location = {}

    @property
    def code(self) -> bytes:
        return self._bytecode.to_bytes()

    @property
    def constants(self) -> typing.List[float]:
        return self._constant_table.get_constants()

    @property
    def strings(self) -> typing.List[str]:
        return self._string_table.get_constants()

    def add_constant(self, source_location: SourceLocation, number: float) -> int:
        try:
            return self._constant_table.add_constant(float(number))
        except TooManyConstantsException:
            raise ConstantPoolTooLargeError(source_location) from None

    def add_string(self, source_location: SourceLocation, string: str) -> int:
        try:
            return self._string_table.add_constant(str(string))
        except TooManyConstantsException:
            raise StringPoolTooLargeError(source_location) from None

    def get_constant(self, constant_id: int) -> float:
        return self._constant_table.get_constant(constant_id)

    def get_string(self, string_id: int) -> str:
        return self._string_table.get_constant(string_id)

    def get_next_instruction_offset(self) -> int:
        return self._bytecode.get_next_instruction_offset()

    def add_instruction(self, source_location: SourceLocation, opcode: Opcode
                        , *operands: int) -> int:
        instruction_offset = self._bytecode.add_instruction(opcode, *operands)
        self._instruction_offset_2_source_location[instruction_offset] = source_location
        return instruction_offset

    def patch_jump(self, source_location: SourceLocation, instruction_offset: int
                   , delta: int) -> None:
        try:
            self._bytecode.patch_jump(instruction_offset, delta)
        except JumpTooLargeException:
            raise JumpTooLargeError(source_location) from None

    def truncate(self, instruction_offset: int) -> None:
        self._bytecode.truncate(instruction_offset)

        for instruction_offset2 in list(self._instruction_offset_2_source_location.keys()):
            if instruction_offset2 >= instruction_offset:
                del self._instruction_offset_2_source_location[instruction_offset2]

    def get_instructions(self, next_instruction_offset: int = 0) \
        -> typing.Iterable[typing.Tuple[int, typing.Union[Opcode, int], typing.Tuple[int, ...]]]:
        return self._bytecode.get_instructions(next_instruction_offset)

    def get_source_location(self, instruction_offset: int) -> typing.Optional[SourceLocation]:
        return self._instruction_offset_2_source_location.get(instruction_offset)

    def free(self) -> None:
        self._bytecode.clear()
        self._constant_table.clear()
        self._string_table.clear()
        self._instruction_offset_2_source_location.clear()

    def __len__(self) -> int:
        return len(self._bytecode)
