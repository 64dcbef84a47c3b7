__all__ = (
    "BytecodeGenerator",
)


import contextlib
import typing

from .ast import ASTNode, ASTVisitor
from .error import Error \
                   , TooManyParametersError \
                   , TooManyArgumentsError \
                   , FunctionLocationTooLargeError \
                   , ReturnOutsideFunctionError \
                   , NestedFunctionError \
                   , NestingTooDeepError \
                   , UnknownNodeError
from .expression import *
from .function_scope import *
from .source_location import SourceLocation
from .statement import *
from .token import ExtraTokenType
from vm.bytecode import Opcode, JUMP_PLACEHOLDER, get_instruction_length
from vm.chunk import Chunk


class BytecodeGenerator(ASTVisitor):
    """Lowers statements into a chunk, one statement per ``compile`` call.

    Outside a function every variable is a global. Inside a function body,
    parameters and ``let`` bindings live on the value stack at ``fp + slot``
    and everything else falls back to the globals table.
    """

    __slots__ = (
        "_chunk",
        "_function_scope",
    )

    def __init__(self) -> None:
        super().__init__()
        self._chunk = None
        self._function_scope = None

    def compile(self, chunk: Chunk, statement: Statement) -> int:
        """Append the code of one statement to the chunk and return the number
        of bytes emitted. On error the chunk's code is rolled back."""
        if not isinstance(statement, Statement) \
           or type(statement).accept_visit is ASTNode.accept_visit:
            raise UnknownNodeError(statement)

        instruction_offset = chunk.get_next_instruction_offset()
        self._chunk = chunk

        try:
            statement.accept_visit(self)
        except RecursionError:
            chunk.truncate(instruction_offset)
            raise NestingTooDeepError(statement.source_location) from None
        except Error:
            chunk.truncate(instruction_offset)
            raise
        finally:
            self._chunk = None
            self._function_scope = None

        return chunk.get_next_instruction_offset() - instruction_offset

    def compile_program(self, chunk: Chunk, statements: typing.List[Statement]) -> int:
        number_of_bytes = 0

        for statement in statements:
            number_of_bytes += self.compile(chunk, statement)

        source_location = statements[-1].source_location if len(statements) >= 1 else None
        chunk.add_instruction(source_location, Opcode.EXIT)
        return number_of_bytes + get_instruction_length(Opcode.EXIT)

    def visit_expression_statement(self, statement: ExpressionStatement) -> None:
        statement.expression.accept_visit(self)
        self._chunk.add_instruction(statement.source_location, Opcode.POP)

    def visit_print_statement(self, statement: PrintStatement) -> None:
        statement.expression.accept_visit(self)
        self._chunk.add_instruction(statement.source_location, Opcode.PRINT)

    def visit_let_statement(self, statement: LetStatement) -> None:
        statement.value.accept_visit(self)

        if self._function_scope is None:
            self._store_global_variable(statement.source_location, statement.name)
        else:
            # The value just pushed already sits at fp + slot.
            self._function_scope.create_local_variable(statement.source_location
                                                       , statement.name)

    def visit_assign_statement(self, statement: AssignStatement) -> None:
        statement.value.accept_visit(self)
        slot = self._find_local_variable(statement.name)

        if slot is None:
            self._store_global_variable(statement.source_location, statement.name)
        else:
            self._chunk.add_instruction(statement.source_location, Opcode.DEEP_SET, slot)

    def visit_block_statement(self, statement: BlockStatement) -> None:
        with self._enter_block_scope(statement.source_location):
            for statement1 in statement.statements:
                statement1.accept_visit(self)

    def visit_if_statement(self, statement: IfStatement) -> None:
        statement.condition.accept_visit(self)
        instruction_offset1 = self._add_jump(statement.source_location, Opcode.JZ)

        with self._enter_block_scope(statement.source_location):
            statement.then_branch.accept_visit(self)

        if statement.else_branch is None:
            self._patch_jump(statement.source_location, instruction_offset1
                             , self._chunk.get_next_instruction_offset())
            return

        instruction_offset2 = self._add_jump(statement.source_location, Opcode.JMP)
        self._patch_jump(statement.source_location, instruction_offset1
                         , self._chunk.get_next_instruction_offset())

        with self._enter_block_scope(statement.source_location):
            statement.else_branch.accept_visit(self)

        self._patch_jump(statement.source_location, instruction_offset2
                         , self._chunk.get_next_instruction_offset())

    def visit_while_statement(self, statement: WhileStatement) -> None:
        label = self._chunk.get_next_instruction_offset()
        statement.condition.accept_visit(self)
        instruction_offset1 = self._add_jump(statement.source_location, Opcode.JZ)

        with self._enter_block_scope(statement.source_location):
            statement.body.accept_visit(self)

        instruction_offset2 = self._add_jump(statement.source_location, Opcode.JMP)
        self._patch_jump(statement.source_location, instruction_offset2, label)
        self._patch_jump(statement.source_location, instruction_offset1
                         , self._chunk.get_next_instruction_offset())

    def visit_function_statement(self, statement: FunctionStatement) -> None:
        if self._function_scope is not None:
            raise NestedFunctionError(statement.source_location, statement.name)

        if len(statement.parameters) > _MAX_NUMBER_OF_PARAMETERS:
            raise TooManyParametersError(statement.parameters[_MAX_NUMBER_OF_PARAMETERS]
                                         .source_location)

        function_name_id = self._chunk.add_string(statement.source_location
                                                  , statement.name)
        location = self._chunk.get_next_instruction_offset() \
                   + get_instruction_length(Opcode.FUNC) + get_instruction_length(Opcode.JMP)

        if location > _MAX_FUNCTION_LOCATION:
            raise FunctionLocationTooLargeError(statement.source_location
                                                , statement.name)

        self._chunk.add_instruction(
            statement.source_location,
            Opcode.FUNC,
            function_name_id,
            len(statement.parameters),
            location,
        )

        instruction_offset = self._add_jump(statement.source_location, Opcode.JMP)
        function_scope = FunctionScope(_MAX_NUMBER_OF_LOCAL_VARIABLES)

        for parameter in statement.parameters:
            function_scope.create_local_variable(parameter.source_location, parameter.name)

        self._function_scope = function_scope

        try:
            for statement1 in statement.body.statements:
                statement1.accept_visit(self)

                if isinstance(statement1, ReturnStatement):
                    break
            else:
                source_location = statement.body.source_location
                self._chunk.add_instruction(source_location, Opcode.NULL)
                self._chunk.add_instruction(source_location, Opcode.RET)
        finally:
            self._function_scope = None

        self._patch_jump(statement.source_location, instruction_offset
                         , self._chunk.get_next_instruction_offset())

    def visit_return_statement(self, statement: ReturnStatement) -> None:
        if self._function_scope is None:
            raise ReturnOutsideFunctionError(statement.source_location)

        if statement.value is None:
            self._chunk.add_instruction(statement.source_location, Opcode.NULL)
        else:
            statement.value.accept_visit(self)

        self._chunk.add_instruction(statement.source_location, Opcode.RET)

    def visit_literal_expression(self, expression: LiteralExpression) -> None:
        value = expression.value

        if value is None:
            self._chunk.add_instruction(expression.source_location, Opcode.NULL)
        elif isinstance(value, bool):
            self._chunk.add_instruction(expression.source_location
                                        , Opcode.TRUE if value else Opcode.FALSE)
        elif isinstance(value, str):
            string_id = self._chunk.add_string(expression.source_location, value)
            self._chunk.add_instruction(expression.source_location, Opcode.STR, string_id)
        else:
            constant_id = self._chunk.add_constant(expression.source_location, float(value))
            self._chunk.add_instruction(expression.source_location, Opcode.CONST, constant_id)

    def visit_variable_expression(self, expression: VariableExpression) -> None:
        slot = self._find_local_variable(expression.name)

        if slot is None:
            string_id = self._chunk.add_string(expression.source_location, expression.name)
            self._chunk.add_instruction(expression.source_location, Opcode.GET_GLOBAL, string_id)
        else:
            self._chunk.add_instruction(expression.source_location, Opcode.DEEP_GET, slot)

    def visit_unary_expression(self, expression: UnaryExpression) -> None:
        expression.operand.accept_visit(self)
        opcode = _OPERATOR_2_OPCODE1[expression.operator]
        self._chunk.add_instruction(expression.source_location, opcode)

    def visit_binary_expression(self, expression: BinaryExpression) -> None:
        expression.left.accept_visit(self)
        expression.right.accept_visit(self)

        for opcode in _OPERATOR_2_OPCODES2[expression.operator]:
            self._chunk.add_instruction(expression.source_location, opcode)

    def visit_call_expression(self, expression: CallExpression) -> None:
        if len(expression.arguments) > _MAX_NUMBER_OF_ARGUMENTS:
            raise TooManyArgumentsError(expression.arguments[_MAX_NUMBER_OF_ARGUMENTS]
                                        .source_location)

        for argument in expression.arguments:
            argument.accept_visit(self)

        function_name_id = self._chunk.add_string(expression.source_location
                                                  , expression.callee)

        self._chunk.add_instruction(
            expression.source_location,
            Opcode.INVOKE,
            function_name_id,
            len(expression.arguments),
        )

    @contextlib.contextmanager
    def _enter_block_scope(self, source_location: SourceLocation) -> typing.ContextManager[None]:
        if self._function_scope is None:
            yield
            return

        function_scope = self._function_scope

        with function_scope.enter_block_scope():
            number_of_local_variables = function_scope.get_local_variable_count()
            yield

            for _ in range(function_scope.get_local_variable_count()
                           - number_of_local_variables):
                self._chunk.add_instruction(source_location, Opcode.POP)

    def _find_local_variable(self, variable_name: str) -> typing.Optional[int]:
        if self._function_scope is None:
            return None

        return self._function_scope.find_local_variable(variable_name)

    def _store_global_variable(self, source_location: SourceLocation, variable_name: str) \
        -> None:
        string_id = self._chunk.add_string(source_location, variable_name)
        self._chunk.add_instruction(source_location, Opcode.SET_GLOBAL, string_id)

    def _add_jump(self, source_location: SourceLocation, opcode: Opcode) -> int:
        return self._chunk.add_instruction(source_location, opcode, JUMP_PLACEHOLDER)

    def _patch_jump(self, source_location: SourceLocation, instruction_offset: int
                    , label: int) -> None:
        # Offsets are relative to the byte following the jump instruction.
        delta = label - (instruction_offset + get_instruction_length(Opcode.JMP))
        self._chunk.patch_jump(source_location, instruction_offset, delta)


_MAX_NUMBER_OF_PARAMETERS = 255
_MAX_NUMBER_OF_ARGUMENTS = 255
_MAX_NUMBER_OF_LOCAL_VARIABLES = 256
_MAX_FUNCTION_LOCATION = 255

_OPERATOR_2_OPCODE1: typing.Dict[ExtraTokenType, Opcode] = {
    ExtraTokenType.MINUS: Opcode.NEGATE,
    ExtraTokenType.BANG: Opcode.NOT,
}

_OPERATOR_2_OPCODES2: typing.Dict[ExtraTokenType, typing.Tuple[Opcode, ...]] = {
    ExtraTokenType.EQUAL_EQUAL: (Opcode.EQ,),
    ExtraTokenType.BANG_EQUAL: (Opcode.EQ, Opcode.NOT),
    ExtraTokenType.LESS: (Opcode.LT,),
    ExtraTokenType.LESS_EQUAL: (Opcode.GT, Opcode.NOT),
    ExtraTokenType.GREATER: (Opcode.GT,),
    ExtraTokenType.GREATER_EQUAL: (Opcode.LT, Opcode.NOT),
    ExtraTokenType.PLUS: (Opcode.ADD,),
    ExtraTokenType.MINUS: (Opcode.SUB,),
    ExtraTokenType.STAR: (Opcode.MUL,),
    ExtraTokenType.SLASH: (Opcode.DIV,),
    ExtraTokenType.PERCENT: (Opcode.MOD,),
}
