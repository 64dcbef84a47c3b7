__all__ = (
    "Expression",
    "LiteralValue",
    "LiteralExpression",
    "VariableExpression",
    "UnaryExpression",
    "BinaryExpression",
    "CallExpression",
)


import typing

from .ast import *
from .source_location import SourceLocation
from .token import ExtraTokenType


class Expression(ASTNode):
    pass


# null, true/false, numbers and strings; numbers are always floats.
LiteralValue = typing.Union[None, bool, float, str]


class LiteralExpression(Expression):
    __slots__ = (
        "_value",
    )

    def __init__(self, source_location: SourceLocation, *, value: LiteralValue) -> None:
        super().__init__(source_location)
        self._value = value

    @property
    def value(self) -> LiteralValue:
        return self._value

    def accept_visit(self, visitor: ASTVisitor) -> None:
        visitor.visit_literal_expression(self)


class VariableExpression(Expression):
    __slots__ = (
        "_name",
    )

    def __init__(self, source_location: SourceLocation, *, name: str) -> None:
        super().__init__(source_location)
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def accept_visit(self, visitor: ASTVisitor) -> None:
        visitor.visit_variable_expression(self)


class UnaryExpression(Expression):
    __slots__ = (
        "_operator",
        "_operand",
    )

    def __init__(self, source_location: SourceLocation, *, operator: ExtraTokenType
                 , operand: Expression) -> None:
        super().__init__(source_location)
        self._operator = operator
        self._operand = operand

    @property
    def operator(self) -> ExtraTokenType:
        return self._operator

    @property
    def operand(self) -> Expression:
        return self._operand

    def accept_visit(self, visitor: ASTVisitor) -> None:
        visitor.visit_unary_expression(self)


class BinaryExpression(Expression):
    __slots__ = (
        "_operator",
        "_left",
        "_right",
    )

    def __init__(self, source_location: SourceLocation, *, operator: ExtraTokenType
                 , left: Expression, right: Expression) -> None:
        super().__init__(source_location)
        self._operator = operator
        self._left = left
        self._right = right

    @property
    def operator(self) -> ExtraTokenType:
        return self._operator

    @property
    def left(self) -> Expression:
        return self._left

    @property
    def right(self) -> Expression:
        return self._right

    def accept_visit(self, visitor: ASTVisitor) -> None:
        visitor.visit_binary_expression(self)


class CallExpression(Expression):
    """Only named functions can be called, so the callee is a bare name."""

    __slots__ = (
        "_callee",
        "_arguments",
    )

    def __init__(self, source_location: SourceLocation, *, callee: str
                 , arguments: typing.List[Expression]) -> None:
        super().__init__(source_location)
        self._callee = callee
        self._arguments = arguments

    @property
    def callee(self) -> str:
        return self._callee

    @property
    def arguments(self) -> typing.List[Expression]:
        return self._arguments

    def accept_visit(self, visitor: ASTVisitor) -> None:
        visitor.visit_call_expression(self)


from . import statement
