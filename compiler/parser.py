__all__ = (
    "Parser",
)


import typing

from . import utils
from .ast import ASTNode
from .error import EndOfFileError, UnexpectedTokenError, NestingTooDeepError
from .expression import *
from .scanner import Scanner
from .statement import *
from .token import *


class Parser:
    """Recursive descent parser for Venom programs.

    Binary operators are parsed by precedence climbing; every level is left
    associative. White spaces and comments are dropped on the way in.
    """

    __slots__ = (
        "_scanner",
        "_lookahead",
    )

    def __init__(self, scanner: Scanner) -> None:
        self._scanner = scanner
        self._lookahead: typing.List[Token] = []

    def get_program(self) -> typing.List[Statement]:
        statements = []

        while not self._check(BasicTokenType.NO):
            source_location = self._peek().source_location

            try:
                statement = self._parse_statement()
            except RecursionError:
                raise NestingTooDeepError(source_location) from None

            statements.append(statement)

        return statements

    def _parse_statement(self) -> Statement:
        parse = _TOKEN_TYPE_2_STATEMENT_PARSER.get(self._peek().type)

        if parse is not None:
            return parse(self)

        if self._check(BasicTokenType.IDENTIFIER) and self._check(ExtraTokenType.EQUAL, 2):
            return self._parse_assign_statement()

        expression = self._parse_expression()
        self._expect(ExtraTokenType.SEMICOLON)
        return ExpressionStatement(expression.source_location, expression = expression)

    def _parse_block_statement(self) -> BlockStatement:
        left_brace = self._expect(ExtraTokenType.LEFT_BRACE)
        statements = []

        while self._accept(ExtraTokenType.RIGHT_BRACE) is None:
            statements.append(self._parse_statement())

        return BlockStatement(left_brace.source_location, statements = statements)

    def _parse_print_statement(self) -> PrintStatement:
        keyword = self._expect(BasicTokenType.PRINT_KEYWORD)
        expression = self._parse_expression()
        self._expect(ExtraTokenType.SEMICOLON)
        return PrintStatement(keyword.source_location, expression = expression)

    def _parse_let_statement(self) -> LetStatement:
        keyword = self._expect(BasicTokenType.LET_KEYWORD)
        name, value = self._parse_binding()
        return LetStatement(keyword.source_location, name = name.data, value = value)

    def _parse_assign_statement(self) -> AssignStatement:
        name, value = self._parse_binding()
        return AssignStatement(name.source_location, name = name.data, value = value)

    def _parse_binding(self) -> typing.Tuple[Token, Expression]:
        # name = value ;
        name = self._expect(BasicTokenType.IDENTIFIER)
        self._expect(ExtraTokenType.EQUAL)
        value = self._parse_expression()
        self._expect(ExtraTokenType.SEMICOLON)
        return name, value

    def _parse_function_statement(self) -> FunctionStatement:
        keyword = self._expect(BasicTokenType.FN_KEYWORD)
        name = self._expect(BasicTokenType.IDENTIFIER)
        parameters = self._parse_parenthesized_list(self._parse_variable_expression)
        body = self._parse_block_statement()

        return FunctionStatement(
            keyword.source_location,
            name = name.data,
            parameters = parameters,
            body = body,
        )

    def _parse_return_statement(self) -> ReturnStatement:
        keyword = self._expect(BasicTokenType.RETURN_KEYWORD)

        if self._accept(ExtraTokenType.SEMICOLON) is not None:
            return ReturnStatement(keyword.source_location)

        value = self._parse_expression()
        self._expect(ExtraTokenType.SEMICOLON)
        return ReturnStatement(keyword.source_location, value = value)

    def _parse_if_statement(self) -> IfStatement:
        keyword = self._expect(BasicTokenType.IF_KEYWORD)
        condition = self._parse_condition()
        then_branch = self._parse_statement()

        if self._accept(BasicTokenType.ELSE_KEYWORD) is None:
            else_branch = None
        else:
            else_branch = self._parse_statement()

        return IfStatement(
            keyword.source_location,
            condition = condition,
            then_branch = then_branch,
            else_branch = else_branch,
        )

    def _parse_while_statement(self) -> WhileStatement:
        keyword = self._expect(BasicTokenType.WHILE_KEYWORD)
        condition = self._parse_condition()
        body = self._parse_statement()
        return WhileStatement(keyword.source_location, condition = condition, body = body)

    def _parse_condition(self) -> Expression:
        self._expect(ExtraTokenType.LEFT_PAREN)
        condition = self._parse_expression()
        self._expect(ExtraTokenType.RIGHT_PAREN)
        return condition

    def _parse_expression(self, min_precedence: int = 1) -> Expression:
        left = self._parse_unary_expression()

        while True:
            precedence = _BINARY_OPERATOR_2_PRECEDENCE.get(self._peek().type, 0)

            if precedence < min_precedence:
                return left

            operator = self._next().type
            # Climbing one level higher on the right makes the operator left associative.
            right = self._parse_expression(precedence + 1)

            left = BinaryExpression(
                left.source_location,
                operator = operator,
                left = left,
                right = right,
            )

    def _parse_unary_expression(self) -> Expression:
        operator = self._accept(ExtraTokenType.MINUS, ExtraTokenType.BANG)

        if operator is None:
            return self._parse_primary_expression()

        return UnaryExpression(
            operator.source_location,
            operator = operator.type,
            operand = self._parse_unary_expression(),
        )

    def _parse_primary_expression(self) -> Expression:
        token = self._peek()

        if token.type is ExtraTokenType.LEFT_PAREN:
            self._next()
            expression = self._parse_expression()
            self._expect(ExtraTokenType.RIGHT_PAREN)
            return expression

        if token.type is BasicTokenType.IDENTIFIER:
            if self._check(ExtraTokenType.LEFT_PAREN, 2):
                return self._parse_call_expression()

            return self._parse_variable_expression()

        if token.type is BasicTokenType.NUMBER_LITERAL:
            value = float(token.data)
        elif token.type is BasicTokenType.STRING_LITERAL:
            value = _decode_string_literal(token.data)
        elif token.type in _KEYWORD_2_LITERAL_VALUE:
            value = _KEYWORD_2_LITERAL_VALUE[token.type]
        else:
            self._unexpect_token(token)

        self._next()
        return LiteralExpression(token.source_location, value = value)

    def _parse_variable_expression(self) -> VariableExpression:
        name = self._expect(BasicTokenType.IDENTIFIER)
        return VariableExpression(name.source_location, name = name.data)

    def _parse_call_expression(self) -> CallExpression:
        callee = self._expect(BasicTokenType.IDENTIFIER)
        arguments = self._parse_parenthesized_list(self._parse_expression)
        return CallExpression(callee.source_location, callee = callee.data, arguments = arguments)

    def _parse_parenthesized_list(self, parse_item: typing.Callable[[], ASTNode]) -> list:
        # ( [item {, item}] )
        self._expect(ExtraTokenType.LEFT_PAREN)
        items = []

        if self._accept(ExtraTokenType.RIGHT_PAREN) is not None:
            return items

        while True:
            items.append(parse_item())

            if self._expect(ExtraTokenType.COMMA, ExtraTokenType.RIGHT_PAREN).type \
               is ExtraTokenType.RIGHT_PAREN:
                return items

    def _peek(self, position: int = 1) -> Token:
        while len(self._lookahead) < position:
            token = self._scanner.get_token()

            if token.type in (BasicTokenType.COMMENT, BasicTokenType.WHITE_SPACE):
                continue

            if token.type is BasicTokenType.NO:
                return token

            self._lookahead.append(token)

        return self._lookahead[position - 1]

    def _next(self) -> Token:
        token = self._peek()

        if token.type is BasicTokenType.NO:
            raise EndOfFileError(token.source_location)

        del self._lookahead[0]
        return token

    def _check(self, token_type: TokenType, position: int = 1) -> bool:
        return self._peek(position).type is token_type

    def _accept(self, *token_types: TokenType) -> typing.Optional[Token]:
        if self._peek().type in token_types:
            return self._next()

        return None

    def _expect(self, *token_types: TokenType) -> Token:
        token = self._accept(*token_types)

        if token is None:
            self._unexpect_token(self._peek(), token_types)

        return token

    def _unexpect_token(self, token: Token
                        , expected_token_types: typing.Sequence[TokenType] = ()) -> typing.NoReturn:
        if token.type is BasicTokenType.NO:
            raise EndOfFileError(token.source_location)

        raise UnexpectedTokenError(token.source_location, token.data, expected_token_types)


def _decode_string_literal(string_literal: str) -> str:
    chars = iter(string_literal[1:-1])
    string = []

    for char in chars:
        if char == "\\":
            char = utils.ESCAPED_CHAR_2_CHAR[next(chars)]

        string.append(char)

    return "".join(string)


_TOKEN_TYPE_2_STATEMENT_PARSER: typing.Dict[TokenType, typing.Callable[[Parser], Statement]] = {
    ExtraTokenType.LEFT_BRACE: Parser._parse_block_statement,
    BasicTokenType.PRINT_KEYWORD: Parser._parse_print_statement,
    BasicTokenType.LET_KEYWORD: Parser._parse_let_statement,
    BasicTokenType.FN_KEYWORD: Parser._parse_function_statement,
    BasicTokenType.RETURN_KEYWORD: Parser._parse_return_statement,
    BasicTokenType.IF_KEYWORD: Parser._parse_if_statement,
    BasicTokenType.WHILE_KEYWORD: Parser._parse_while_statement,
}

_KEYWORD_2_LITERAL_VALUE: typing.Dict[BasicTokenType, LiteralValue] = {
    BasicTokenType.NULL_KEYWORD: None,
    BasicTokenType.TRUE_KEYWORD: True,
    BasicTokenType.FALSE_KEYWORD: False,
}

# Loosest first.
_BINARY_OPERATOR_LEVELS: typing.Tuple[typing.Tuple[ExtraTokenType, ...], ...] = (
    (ExtraTokenType.EQUAL_EQUAL, ExtraTokenType.BANG_EQUAL),
    (ExtraTokenType.LESS, ExtraTokenType.LESS_EQUAL, ExtraTokenType.GREATER
     , ExtraTokenType.GREATER_EQUAL),
    (ExtraTokenType.PLUS, ExtraTokenType.MINUS),
    (ExtraTokenType.STAR, ExtraTokenType.SLASH, ExtraTokenType.PERCENT),
)

_BINARY_OPERATOR_2_PRECEDENCE: typing.Dict[ExtraTokenType, int] = {
    operator: precedence
    for precedence, operators in enumerate(_BINARY_OPERATOR_LEVELS, 1)
    for operator in operators
}
