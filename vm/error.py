import typing

from .value import ValueType


class Error(Exception):
    def __init__(self, description: str) -> None:
        super().__init__(description)


class VariableNotDefinedError(Error):
    def __init__(self, variable_name: str) -> None:
        super().__init__("Variable '{}' is not defined".format(variable_name))


class FunctionNotDefinedError(Error):
    def __init__(self, function_name: str) -> None:
        super().__init__("Function '{}' is not defined".format(function_name))


class NotCallableError(Error):
    def __init__(self, name: str, value_type: ValueType) -> None:
        super().__init__("'{}' is a {}, not a function".format(name, value_type))


class ArityMismatchError(Error):
    def __init__(self, function_name: str, arity: int, number_of_arguments: int) -> None:
        super().__init__("Function '{}' expects {} argument(s) but got {}"
                         .format(function_name, arity, number_of_arguments))


class IncompatibleOperandTypesError(Error):
    def __init__(self, operator: str, value_types: typing.List[ValueType]) -> None:
        super().__init__("Incompatible operand type(s) for {}: {}"
                         .format(operator, ", ".join((str(value_type)
                                                      for value_type in value_types))))


class StackOverflowError(Error):
    def __init__(self) -> None:
        super().__init__("Stack overflow")


class StackUnderflowError(Error):
    def __init__(self) -> None:
        super().__init__("Stack underflow")


class FrameOverflowError(Error):
    def __init__(self) -> None:
        super().__init__("Too many nested calls")


class InvalidStackSlotError(Error):
    def __init__(self, slot: int) -> None:
        super().__init__("Invalid stack slot {}".format(slot))


class InvalidReturnError(Error):
    def __init__(self, description: str) -> None:
        super().__init__("Invalid return: {}".format(description))


class InvalidPoolIndexError(Error):
    def __init__(self, pool_name: str, index: int) -> None:
        super().__init__("Invalid {} pool index {}".format(pool_name, index))


class InstructionPointerOutOfRangeError(Error):
    def __init__(self, instruction_pointer: int) -> None:
        super().__init__("Instruction pointer {} out of range".format(instruction_pointer))


class UnknownOpcodeError(Error):
    def __init__(self, byte: int, instruction_offset: int) -> None:
        super().__init__("Unknown opcode {:#04x} at offset {}".format(byte, instruction_offset))
