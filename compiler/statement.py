__all__ = (
    "Statement",
    "ExpressionStatement",
    "PrintStatement",
    "LetStatement",
    "AssignStatement",
    "BlockStatement",
    "IfStatement",
    "WhileStatement",
    "FunctionStatement",
    "ReturnStatement",
)


import typing

from .ast import *
from .source_location import SourceLocation


class Statement(ASTNode):
    pass


class ExpressionStatement(Statement):
    """``expression;``, the value is evaluated then discarded."""

    __slots__ = (
        "_expression",
    )

    def __init__(self, source_location: SourceLocation, *
                 , expression: "expression.Expression") -> None:
        super().__init__(source_location)
        self._expression = expression

    @property
    def expression(self) -> "expression.Expression":
        return self._expression

    def accept_visit(self, visitor: ASTVisitor) -> None:
        visitor.visit_expression_statement(self)


class PrintStatement(ExpressionStatement):
    def accept_visit(self, visitor: ASTVisitor) -> None:
        visitor.visit_print_statement(self)


class LetStatement(Statement):
    __slots__ = (
        "_name",
        "_value",
    )

    def __init__(self, source_location: SourceLocation, *, name: str
                 , value: "expression.Expression") -> None:
        super().__init__(source_location)
        self._name = name
        self._value = value

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> "expression.Expression":
        return self._value

    def accept_visit(self, visitor: ASTVisitor) -> None:
        visitor.visit_let_statement(self)


class AssignStatement(LetStatement):
    """``name = value;``, same shape as ``let`` but binds nothing new."""

    def accept_visit(self, visitor: ASTVisitor) -> None:
        visitor.visit_assign_statement(self)


class BlockStatement(Statement):
    __slots__ = (
        "_statements",
    )

    def __init__(self, source_location: SourceLocation, *
                 , statements: typing.List[Statement]) -> None:
        super().__init__(source_location)
        self._statements = statements

    @property
    def statements(self) -> typing.List[Statement]:
        return self._statements

    def accept_visit(self, visitor: ASTVisitor) -> None:
        visitor.visit_block_statement(self)


class IfStatement(Statement):
    __slots__ = (
        "_condition",
        "_then_branch",
        "_else_branch",
    )

    def __init__(self, source_location: SourceLocation, *, condition: "expression.Expression"
                 , then_branch: Statement
                 , else_branch: typing.Optional[Statement] = None) -> None:
        super().__init__(source_location)
        self._condition = condition
        self._then_branch = then_branch
        self._else_branch = else_branch

    @property
    def condition(self) -> "expression.Expression":
        return self._condition

    @property
    def then_branch(self) -> Statement:
        return self._then_branch

    @property
    def else_branch(self) -> typing.Optional[Statement]:
        return self._else_branch

    def accept_visit(self, visitor: ASTVisitor) -> None:
        visitor.visit_if_statement(self)


class WhileStatement(Statement):
    __slots__ = (
        "_condition",
        "_body",
    )

    def __init__(self, source_location: SourceLocation, *, condition: "expression.Expression"
                 , body: Statement) -> None:
        super().__init__(source_location)
        self._condition = condition
        self._body = body

    @property
    def condition(self) -> "expression.Expression":
        return self._condition

    @property
    def body(self) -> Statement:
        return self._body

    def accept_visit(self, visitor: ASTVisitor) -> None:
        visitor.visit_while_statement(self)


class FunctionStatement(Statement):
    """``fn name(parameters) { body }``, only allowed at the top level."""

    __slots__ = (
        "_name",
        "_parameters",
        "_body",
    )

    def __init__(self, source_location: SourceLocation, *, name: str
                 , parameters: typing.List["expression.VariableExpression"]
                 , body: BlockStatement) -> None:
        super().__init__(source_location)
        self._name = name
        self._parameters = parameters
        self._body = body

    @property
    def name(self) -> str:
        return self._name

    @property
    def parameters(self) -> typing.List["expression.VariableExpression"]:
        return self._parameters

    @property
    def body(self) -> BlockStatement:
        return self._body

    def accept_visit(self, visitor: ASTVisitor) -> None:
        visitor.visit_function_statement(self)


class ReturnStatement(Statement):
    __slots__ = (
        "_value",
    )

    def __init__(self, source_location: SourceLocation, *
                 , value: typing.Optional["expression.Expression"] = None) -> None:
        super().__init__(source_location)
        self._value = value

    @property
    def value(self) -> typing.Optional["expression.Expression"]:
        return self._value

    def accept_visit(self, visitor: ASTVisitor) -> None:
        visitor.visit_return_statement(self)
