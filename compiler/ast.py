__all__ = (
    "ASTVisitor",
    "ASTNode",
)


from .source_location import SourceLocation


class ASTVisitor:
    """Double dispatch target of ``ASTNode.accept_visit``; one hook per node class."""

    def visit_literal_expression(self, expression: "expression.LiteralExpression") -> None:
        raise NotImplementedError()

    def visit_variable_expression(self, expression: "expression.VariableExpression") -> None:
        raise NotImplementedError()

    def visit_unary_expression(self, expression: "expression.UnaryExpression") -> None:
        raise NotImplementedError()

    def visit_binary_expression(self, expression: "expression.BinaryExpression") -> None:
        raise NotImplementedError()

    def visit_call_expression(self, expression: "expression.CallExpression") -> None:
        raise NotImplementedError()

    def visit_expression_statement(self, statement: "statement.ExpressionStatement") -> None:
        raise NotImplementedError()

    def visit_print_statement(self, statement: "statement.PrintStatement") -> None:
        raise NotImplementedError()

    def visit_let_statement(self, statement: "statement.LetStatement") -> None:
        raise NotImplementedError()

    def visit_assign_statement(self, statement: "statement.AssignStatement") -> None:
        raise NotImplementedError()

    def visit_block_statement(self, statement: "statement.BlockStatement") -> None:
        raise NotImplementedError()

    def visit_if_statement(self, statement: "statement.IfStatement") -> None:
        raise NotImplementedError()

    def visit_while_statement(self, statement: "statement.WhileStatement") -> None:
        raise NotImplementedError()

    def visit_function_statement(self, statement: "statement.FunctionStatement") -> None:
        raise NotImplementedError()

    def visit_return_statement(self, statement: "statement.ReturnStatement") -> None:
        raise NotImplementedError()


class ASTNode:
    __slots__ = (
        "_source_location",
    )

    def __init__(self, source_location: SourceLocation) -> None:
        self._source_location = source_location

    @property
    def source_location(self) -> SourceLocation:
        return self._source_location

    def accept_visit(self, visitor: ASTVisitor) -> None:
        raise NotImplementedError()


from . import expression
from . import statement
