__all__ = (
    "Interpreter",
)


import math
import typing

from .bytecode import *
from .chunk import *
from .constant import ConstantNotFoundException
from .error import Error \
                   , VariableNotDefinedError \
                   , FunctionNotDefinedError \
                   , NotCallableError \
                   , ArityMismatchError \
                   , IncompatibleOperandTypesError \
                   , StackOverflowError \
                   , StackUnderflowError \
                   , FrameOverflowError \
                   , InvalidStackSlotError \
                   , InvalidReturnError \
                   , InvalidPoolIndexError \
                   , InstructionPointerOutOfRangeError \
                   , UnknownOpcodeError
from .global_table import GlobalTable
from .value import *


class Interpreter:
    """A stack machine executing one chunk at a time.

    ``ip`` always points at the byte being executed. An instruction handler
    advances ``ip`` over its own immediates and the dispatch loop then adds one
    more, so jump offsets and return addresses are relative to the last byte of
    the instruction that set them.
    """

    __slots__ = (
        "_max_stack_depth",
        "_max_frame_depth",
        "_stack",
        "_frame_pointers",
        "_global_table",
        "_chunk",
        "_code",
        "_instruction_pointer",
        "_instruction_offset",
        "_is_halted",
    )

    def __init__(self, max_stack_depth: int = 256, max_frame_depth: int = 256) -> None:
        self._max_stack_depth = max_stack_depth
        self._max_frame_depth = max_frame_depth
        self._stack = []
        self._frame_pointers = []
        self._global_table = GlobalTable()
        self._chunk = None
        self._code = b""
        self._instruction_pointer = 0
        self._instruction_offset = 0
        self._is_halted = True

    @property
    def global_table(self) -> GlobalTable:
        return self._global_table

    @property
    def tos(self) -> int:
        return len(self._stack)

    @property
    def fp_count(self) -> int:
        return len(self._frame_pointers)

    @property
    def instruction_pointer(self) -> int:
        return self._instruction_pointer

    @property
    def is_halted(self) -> bool:
        return self._is_halted

    def get_stack(self) -> typing.List[Value]:
        return list(self._stack)

    def get_frame_pointers(self) -> typing.List[int]:
        return list(self._frame_pointers)

    def run(self, chunk: Chunk) -> None:
        self.load(chunk)

        while self.step():
            pass

    def load(self, chunk: Chunk) -> None:
        self._chunk = chunk
        # Frozen copy: return addresses are offsets into this buffer.
        self._code = chunk.code
        self._instruction_pointer = 0
        self._instruction_offset = 0
        self._is_halted = False

    def step(self) -> bool:
        if self._is_halted:
            return False

        if self._instruction_pointer >= len(self._code):
            self._is_halted = True
            return False

        self._instruction_offset = self._instruction_pointer
        byte = self._code[self._instruction_pointer]
        instruction_executor = _INSTRUCTION_EXECUTORS.get(byte)

        try:
            if instruction_executor is None:
                raise UnknownOpcodeError(byte, self._instruction_pointer)

            instruction_executor(self)

            if not self._is_halted:
                self._instruction_pointer += 1

                if self._instruction_pointer not in range(0, len(self._code) + 1):
                    raise InstructionPointerOutOfRangeError(self._instruction_pointer)
        except Error:
            self._is_halted = True
            raise

        return not self._is_halted

    def free(self) -> None:
        self._global_table.clear()
        self._stack.clear()
        self._frame_pointers.clear()
        self._chunk = None
        self._code = b""
        self._is_halted = True

    def get_stack_trace(self) -> typing.List[SourceLocation]:
        """Source locations of the current instruction and of every pending
        call site, innermost first."""
        stack_trace = []

        if self._chunk is None:
            return stack_trace

        source_location = self._chunk.get_source_location(self._instruction_offset)

        if source_location is not None:
            stack_trace.append(source_location)

        for frame_pointer in reversed(self._frame_pointers):
            if frame_pointer not in range(1, len(self._stack) + 1):
                continue

            return_address = self._stack[frame_pointer - 1]

            if return_address.type is not ValueType.POINTER:
                continue

            instruction_offset = return_address.data - (get_instruction_length(Opcode.INVOKE) - 1)
            source_location = self._chunk.get_source_location(instruction_offset)

            if source_location is not None:
                stack_trace.append(source_location)

        return stack_trace

    def _push(self, value: Value) -> None:
        if len(self._stack) >= self._max_stack_depth:
            raise StackOverflowError()

        self._stack.append(value)

    def _pop(self) -> Value:
        if len(self._stack) == 0:
            raise StackUnderflowError()

        return self._stack.pop()

    def _read_byte(self) -> int:
        self._instruction_pointer += 1

        if self._instruction_pointer >= len(self._code):
            raise InstructionPointerOutOfRangeError(self._instruction_pointer)

        return self._code[self._instruction_pointer]

    def _read_jump_offset(self) -> int:
        byte1 = self._read_byte()
        byte2 = self._read_byte()
        return int.from_bytes(bytes((byte1, byte2)), "big", signed = True)

    def _get_string(self, string_id: int) -> str:
        try:
            return self._chunk.get_string(string_id)
        except ConstantNotFoundException:
            raise InvalidPoolIndexError("string", string_id) from None

    def _get_stack_position(self, slot: int) -> int:
        if len(self._frame_pointers) == 0:
            raise InvalidStackSlotError(slot)

        stack_pos = self._frame_pointers[-1] + slot

        if stack_pos not in range(0, len(self._stack)):
            raise InvalidStackSlotError(slot)

        return stack_pos

    def _execute_print(self) -> None:
        value = self._pop()
        print(str(value))

    def _execute_arithmetic(self, operator: str, f: typing.Callable[[float, float], float]) \
        -> None:
        value2 = self._pop()
        value1 = self._pop()

        if value1.type is not ValueType.NUMBER or value2.type is not ValueType.NUMBER:
            raise IncompatibleOperandTypesError(operator, [value1.type, value2.type])

        self._push(Value.number(f(value1.data, value2.data)))

    def _execute_add(self) -> None:
        self._execute_arithmetic("+", lambda x, y: x + y)

    def _execute_sub(self) -> None:
        self._execute_arithmetic("-", lambda x, y: x - y)

    def _execute_mul(self) -> None:
        self._execute_arithmetic("*", lambda x, y: x * y)

    def _execute_div(self) -> None:
        self._execute_arithmetic("/", _divide)

    def _execute_mod(self) -> None:
        self._execute_arithmetic("%", _modulo)

    def _execute_comparison(self, operator: str, f: typing.Callable[[float, float], bool]) \
        -> None:
        value2 = self._pop()
        value1 = self._pop()

        if value1.type is not ValueType.NUMBER or value2.type is not ValueType.NUMBER:
            raise IncompatibleOperandTypesError(operator, [value1.type, value2.type])

        self._push(Value.boolean(f(value1.data, value2.data)))

    def _execute_gt(self) -> None:
        self._execute_comparison(">", lambda x, y: x > y)

    def _execute_lt(self) -> None:
        self._execute_comparison("<", lambda x, y: x < y)

    def _execute_eq(self) -> None:
        value2 = self._pop()
        value1 = self._pop()

        if value1.type is not value2.type or value1.type not in _EQUATABLE_VALUE_TYPES:
            raise IncompatibleOperandTypesError("==", [value1.type, value2.type])

        self._push(Value.boolean(value1.data == value2.data))

    def _execute_not(self) -> None:
        value = self._pop()

        if value.type is not ValueType.BOOLEAN:
            raise IncompatibleOperandTypesError("!", [value.type])

        self._push(Value.boolean(not value.data))

    def _execute_negate(self) -> None:
        value = self._pop()

        if value.type is not ValueType.NUMBER:
            raise IncompatibleOperandTypesError("-", [value.type])

        self._push(Value.number(-value.data))

    def _execute_const(self) -> None:
        constant_id = self._read_byte()

        try:
            number = self._chunk.get_constant(constant_id)
        except ConstantNotFoundException:
            raise InvalidPoolIndexError("constant", constant_id) from None

        self._push(Value.number(number))

    def _execute_str(self) -> None:
        string_id = self._read_byte()
        self._push(Value.string(self._get_string(string_id)))

    def _execute_true(self) -> None:
        self._push(Value.boolean(True))

    def _execute_false(self) -> None:
        self._push(Value.boolean(False))

    def _execute_null(self) -> None:
        self._push(Value.null())

    def _execute_pop(self) -> None:
        self._pop()

    def _execute_set_global(self) -> None:
        variable_name = self._get_string(self._read_byte())
        value = self._pop()
        self._global_table.insert(variable_name, value)

    def _execute_get_global(self) -> None:
        variable_name = self._get_string(self._read_byte())
        value = self._global_table.lookup(variable_name)

        if value is None:
            raise VariableNotDefinedError(variable_name)

        self._push(value)

    def _execute_deep_set(self) -> None:
        slot = self._read_byte()
        value = self._pop()
        self._stack[self._get_stack_position(slot)] = value

    def _execute_deep_get(self) -> None:
        slot = self._read_byte()
        self._push(self._stack[self._get_stack_position(slot)])

    def _execute_jmp(self) -> None:
        jump_offset = self._read_jump_offset()
        self._instruction_pointer += jump_offset

    def _execute_jz(self) -> None:
        jump_offset = self._read_jump_offset()
        condition = self._pop()

        if condition.type is not ValueType.BOOLEAN:
            raise IncompatibleOperandTypesError("if", [condition.type])

        if not condition.data:
            self._instruction_pointer += jump_offset

    def _execute_func(self) -> None:
        function_name = self._get_string(self._read_byte())
        arity = self._read_byte()
        location = self._read_byte()
        function = Function(location, function_name, arity)
        self._global_table.insert(function_name, Value.function(function))

    def _execute_invoke(self) -> None:
        function_name = self._get_string(self._read_byte())
        number_of_arguments = self._read_byte()
        value = self._global_table.lookup(function_name)

        if value is None:
            raise FunctionNotDefinedError(function_name)

        if value.type is not ValueType.FUNCTION:
            raise NotCallableError(function_name, value.type)

        function = value.data

        if number_of_arguments != function.arity:
            raise ArityMismatchError(function_name, function.arity, number_of_arguments)

        if len(self._frame_pointers) >= self._max_frame_depth:
            raise FrameOverflowError()

        arguments = [self._pop() for _ in range(number_of_arguments)]
        self._push(Value.pointer(self._instruction_pointer))
        self._frame_pointers.append(len(self._stack))

        for argument in reversed(arguments):
            self._push(argument)

        self._instruction_pointer = function.location - 1

    def _execute_ret(self) -> None:
        return_value = self._pop()

        if len(self._frame_pointers) == 0:
            raise InvalidReturnError("no active call frame")

        frame_pointer = self._frame_pointers.pop()
        del self._stack[frame_pointer:]
        return_address = self._pop()

        if return_address.type is not ValueType.POINTER:
            raise InvalidReturnError("missing return address")

        self._push(return_value)
        self._instruction_pointer = return_address.data

    def _execute_exit(self) -> None:
        self._is_halted = True


def _divide(x: float, y: float) -> float:
    try:
        return x / y
    except ZeroDivisionError:
        if x == 0 or math.isnan(x):
            return math.nan

        return math.copysign(math.inf, x) * math.copysign(1.0, y)


def _modulo(x: float, y: float) -> float:
    try:
        return math.fmod(x, y)
    except ValueError:
        # C fmod yields NaN for a zero divisor or an infinite dividend.
        return math.nan


_EQUATABLE_VALUE_TYPES = (
    ValueType.NUMBER,
    ValueType.BOOLEAN,
    ValueType.STRING,
    ValueType.NULL,
)

_INSTRUCTION_EXECUTORS: typing.Dict[int, typing.Callable[[Interpreter], None]] = {}

_INSTRUCTION_EXECUTORS[Opcode.PRINT] = Interpreter._execute_print
_INSTRUCTION_EXECUTORS[Opcode.ADD] = Interpreter._execute_add
_INSTRUCTION_EXECUTORS[Opcode.SUB] = Interpreter._execute_sub
_INSTRUCTION_EXECUTORS[Opcode.MUL] = Interpreter._execute_mul
_INSTRUCTION_EXECUTORS[Opcode.DIV] = Interpreter._execute_div
_INSTRUCTION_EXECUTORS[Opcode.MOD] = Interpreter._execute_mod
_INSTRUCTION_EXECUTORS[Opcode.EQ] = Interpreter._execute_eq
_INSTRUCTION_EXECUTORS[Opcode.GT] = Interpreter._execute_gt
_INSTRUCTION_EXECUTORS[Opcode.LT] = Interpreter._execute_lt
_INSTRUCTION_EXECUTORS[Opcode.NOT] = Interpreter._execute_not
_INSTRUCTION_EXECUTORS[Opcode.NEGATE] = Interpreter._execute_negate
_INSTRUCTION_EXECUTORS[Opcode.CONST] = Interpreter._execute_const
_INSTRUCTION_EXECUTORS[Opcode.STR] = Interpreter._execute_str
_INSTRUCTION_EXECUTORS[Opcode.TRUE] = Interpreter._execute_true
_INSTRUCTION_EXECUTORS[Opcode.FALSE] = Interpreter._execute_false
_INSTRUCTION_EXECUTORS[Opcode.NULL] = Interpreter._execute_null
_INSTRUCTION_EXECUTORS[Opcode.POP] = Interpreter._execute_pop
_INSTRUCTION_EXECUTORS[Opcode.SET_GLOBAL] = Interpreter._execute_set_global
_INSTRUCTION_EXECUTORS[Opcode.GET_GLOBAL] = Interpreter._execute_get_global
_INSTRUCTION_EXECUTORS[Opcode.DEEP_SET] = Interpreter._execute_deep_set
_INSTRUCTION_EXECUTORS[Opcode.DEEP_GET] = Interpreter._execute_deep_get
_INSTRUCTION_EXECUTORS[Opcode.JMP] = Interpreter._execute_jmp
_INSTRUCTION_EXECUTORS[Opcode.JZ] = Interpreter._execute_jz
_INSTRUCTION_EXECUTORS[Opcode.FUNC] = Interpreter._execute_func
_INSTRUCTION_EXECUTORS[Opcode.INVOKE] = Interpreter._execute_invoke
_INSTRUCTION_EXECUTORS[Opcode.RET] = Interpreter._execute_ret
_INSTRUCTION_EXECUTORS[Opcode.EXIT] = Interpreter._execute_exit

assert len(_INSTRUCTION_EXECUTORS) == len(Opcode.__members__)
