import typing

from .source_location import SourceLocation
from .token import TokenType


class Error(Exception):
    def __init__(self, source_location: typing.Optional[SourceLocation], description: str) \
        -> None:
        if source_location is None:
            super().__init__(description)
        else:
            super().__init__("{}: {}".format(str(source_location), description))


class EndOfFileError(Error):
    def __init__(self, source_location: SourceLocation) -> None:
        super().__init__(source_location, "end of file")


class UnexpectedCharError(Error):
    def __init__(self, source_location: SourceLocation, char: str) -> None:
        super().__init__(source_location, "unexpected char {}".format(repr(char)))


class UnexpectedTokenError(Error):
    def __init__(self, source_location: SourceLocation, token_data: str
                 , expected_token_types: typing.Iterable[TokenType]) -> None:
        description = "unexpected token {}".format(repr(token_data))

        if len(expected_token_types) >= 1:
            description += ", expect {}".format\
                           (" or ".join((str(expected_token_type)
                                         for expected_token_type in expected_token_types)))

        super().__init__(source_location, description)


class LocalVariableExistsError(Error):
    def __init__(self, source_location: SourceLocation, variable_name: str):
        super().__init__(source_location, "local variable `{}` exists".format(variable_name))


class TooManyLocalVariablesError(Error):
    def __init__(self, source_location: SourceLocation) -> None:
        super().__init__(source_location, "too many local variables")


class TooManyParametersError(Error):
    def __init__(self, source_location: SourceLocation) -> None:
        super().__init__(source_location, "too many parameters")


class TooManyArgumentsError(Error):
    def __init__(self, source_location: SourceLocation) -> None:
        super().__init__(source_location, "too many arguments")


class ConstantPoolTooLargeError(Error):
    def __init__(self, source_location: SourceLocation) -> None:
        super().__init__(source_location, "constant pool too large")


class StringPoolTooLargeError(Error):
    def __init__(self, source_location: SourceLocation) -> None:
        super().__init__(source_location, "string pool too large")


class JumpTooLargeError(Error):
    def __init__(self, source_location: SourceLocation) -> None:
        super().__init__(source_location, "jump too large")


class FunctionLocationTooLargeError(Error):
    def __init__(self, source_location: SourceLocation, function_name: str) -> None:
        super().__init__(source_location, "function `{}` starts beyond byte 255"
                                          .format(function_name))


class ReturnOutsideFunctionError(Error):
    def __init__(self, source_location: SourceLocation) -> None:
        super().__init__(source_location, "return outside function")


class NestedFunctionError(Error):
    def __init__(self, source_location: SourceLocation, function_name: str) -> None:
        super().__init__(source_location, "function `{}` declared inside function"
                                          .format(function_name))


class UnknownNodeError(Error):
    def __init__(self, node: object) -> None:
        super().__init__(getattr(node, "source_location", None)
                         , "unknown AST node {}".format(type(node).__name__))


class NestingTooDeepError(Error):
    def __init__(self, source_location: SourceLocation) -> None:
        super().__init__(source_location, "nesting too deep")
