import io
import math

import pytest

from compiler.bytecode_generator import BytecodeGenerator
from compiler.parser import Parser
from compiler.scanner import Scanner
from vm.bytecode import Opcode
from vm.chunk import Chunk
from vm.error import *
from vm.interpreter import Interpreter
from vm.value import ValueType


def compile_source(source):
    chunk = Chunk()
    statements = Parser(Scanner(io.StringIO(source), "t.vn")).get_program()
    BytecodeGenerator().compile_program(chunk, statements)
    return chunk


def run(source, **kwargs):
    interpreter = Interpreter(**kwargs)
    interpreter.run(compile_source(source))
    return interpreter


def output_of(source, capsys):
    run(source)
    return capsys.readouterr().out


def evaluate(source):
    interpreter = run("let result = {};".format(source))
    return interpreter.global_table.lookup("result")


class _RawChunk:
    def __init__(self, code):
        self.code = bytes(code)

    def get_source_location(self, instruction_offset):
        return None


def test_print_arithmetic(capsys):
    assert output_of("print 1 + 2 * 3;", capsys) == "7.000000\n"
    assert output_of("print (1 + 2) * 3 - 10 / 4;", capsys) == "6.500000\n"


def test_print_textual_forms(capsys):
    source = 'print "hi"; print true; print false; print null; print 1 == 1; fn f() {} print f;'
    assert output_of(source, capsys) == "hi\ntrue\nfalse\nnull\ntrue\n<fn f>\n"


def test_string_escapes(capsys):
    assert output_of(r'print "a\tb\"c\\";', capsys) == "a\tb\"c\\\n"


@pytest.mark.parametrize("source, expected", [
    ("1 / 0", math.inf),
    ("-1 / 0", -math.inf),
    ("5.5 % 2", 1.5),
    ("-5 % 3", -2.0),
    ("2 - 5", -3.0),
])
def test_ieee_arithmetic(source, expected):
    value = evaluate(source)
    assert value.type is ValueType.NUMBER
    assert value.data == expected


@pytest.mark.parametrize("source", ["0 / 0", "5 % 0", "(1 / 0) % 2"])
def test_nan_results(source):
    assert math.isnan(evaluate(source).data)


def test_nan_prints_like_printf(capsys):
    assert output_of("print 0 / 0; print 1 / 0; print -1 / 0;", capsys) == "nan\ninf\n-inf\n"


@pytest.mark.parametrize("x", ["0", "1.5", "-3", "1 / 0"])
def test_double_negation_is_identity(x):
    assert evaluate("--({})".format(x)).data == evaluate(x).data


@pytest.mark.parametrize("b", ["true", "false"])
def test_double_not_is_identity(b):
    assert evaluate("!!{}".format(b)).data == evaluate(b).data


@pytest.mark.parametrize("a, b", [("2", "3"), ("0.1", "0.2"), ("-7", "1e10")])
def test_add_and_mul_commute(a, b):
    assert evaluate("{} + {}".format(a, b)).data == evaluate("{} + {}".format(b, a)).data
    assert evaluate("{} * {}".format(a, b)).data == evaluate("{} * {}".format(b, a)).data


@pytest.mark.parametrize("source, expected", [
    ("1 < 2", True),
    ("2 < 1", False),
    ("2 > 1", True),
    ("1 >= 1", True),
    ("1 <= 0", False),
    ("1 != 2", True),
    ('"a" == "a"', True),
    ('"a" == "b"', False),
    ("null == null", True),
    ("true == false", False),
])
def test_comparisons(source, expected):
    value = evaluate(source)
    assert value.type is ValueType.BOOLEAN
    assert value.data is expected


@pytest.mark.parametrize("source", ['1 == "1"', "null == false", '"a" + "b"', "-true", "!1"
                                    , "1 < null"])
def test_incompatible_operand_types(source):
    with pytest.raises(IncompatibleOperandTypesError):
        evaluate(source)


def test_condition_must_be_boolean():
    with pytest.raises(IncompatibleOperandTypesError):
        run("if (1) print 1;")


def test_if_else(capsys):
    assert output_of("if (1 < 2) { print 1; } else { print 2; }", capsys) == "1.000000\n"
    assert output_of("if (1 > 2) { print 1; }", capsys) == ""


def test_while_loop(capsys):
    source = "let i = 0; while (i < 3) { print i; i = i + 1; }"
    assert output_of(source, capsys) == "0.000000\n1.000000\n2.000000\n"


def test_globals():
    interpreter = run("let x = 10; x = x * 2;")
    assert interpreter.global_table.lookup("x").data == 20.0
    assert interpreter.tos == 0


def test_undefined_variable():
    with pytest.raises(VariableNotDefinedError) as exc_info:
        run("print undefined_var;")

    assert str(exc_info.value) == "Variable 'undefined_var' is not defined"


def test_calling_convention():
    chunk = compile_source("fn add(a, b) { return a + b; } print add(2, 3);")
    invoke_offset = 17
    assert chunk.code[invoke_offset] == Opcode.INVOKE
    interpreter = Interpreter()
    interpreter.load(chunk)

    while interpreter.instruction_pointer != invoke_offset:
        assert interpreter.step()

    assert [value.data for value in interpreter.get_stack()] == [2.0, 3.0]
    tos_before_call = interpreter.tos - 2
    interpreter.step()
    frame_pointer, = interpreter.get_frame_pointers()
    stack = interpreter.get_stack()
    assert stack[frame_pointer - 1].type is ValueType.POINTER
    assert stack[frame_pointer + 0].data == 2.0
    assert stack[frame_pointer + 1].data == 3.0
    assert interpreter.instruction_pointer == 7

    while interpreter.fp_count != 0:
        interpreter.step()

    assert interpreter.tos == tos_before_call + 1
    assert interpreter.get_stack()[-1].data == 5.0
    assert interpreter.instruction_pointer == invoke_offset + 3


def test_function_call_output(capsys):
    assert output_of("fn add(a, b) { return a + b; } print add(2, 3);", capsys) == "5.000000\n"


def test_recursion(capsys):
    source = """
    fn fib(n) {
        if (n < 2) return n;
        return fib(n - 1) + fib(n - 2);
    }
    print fib(10);
    """
    assert output_of(source, capsys) == "55.000000\n"


def test_function_locals_and_globals(capsys):
    source = """
    let counter = 0;
    fn bump(step) {
        let next = counter + step;
        counter = next;
        {
            let twice = next * 2;
            step = twice;
        }
        return step;
    }
    print bump(1);
    print bump(2);
    print counter;
    """
    assert output_of(source, capsys) == "2.000000\n6.000000\n3.000000\n"


def test_loop_locals_are_dropped_every_iteration():
    source = """
    fn sum(n) {
        let total = 0;
        while (n > 0) {
            let m = n;
            total = total + m;
            n = n - 1;
        }
        return total;
    }
    let result = sum(100);
    """
    interpreter = run(source)
    assert interpreter.global_table.lookup("result").data == 5050.0
    assert interpreter.tos == 0


def test_implicit_return_value():
    interpreter = run("fn f() {} let result = f();")
    assert interpreter.global_table.lookup("result").type is ValueType.NULL


def test_expression_statements_are_stack_neutral():
    interpreter = run("fn f(x) { return x; } 1 + 2; f(3); f(4);")
    assert interpreter.tos == 0
    assert interpreter.fp_count == 0


def test_arity_mismatch():
    with pytest.raises(ArityMismatchError) as exc_info:
        run("fn f(a) { return a; } f(1, 2);")

    assert str(exc_info.value) == "Function 'f' expects 1 argument(s) but got 2"


def test_undefined_function():
    with pytest.raises(FunctionNotDefinedError):
        run("g();")


def test_not_callable():
    with pytest.raises(NotCallableError):
        run("let x = 1; x();")


def test_unbounded_recursion_overflows():
    with pytest.raises((StackOverflowError, FrameOverflowError)):
        run("fn f(n) { return f(n); } f(1);")


def test_frame_depth_limit():
    with pytest.raises(FrameOverflowError):
        run("fn f() { return f(); } f();", max_stack_depth=1000, max_frame_depth=4)


def test_unknown_opcode():
    interpreter = Interpreter()

    with pytest.raises(UnknownOpcodeError):
        interpreter.run(_RawChunk([0]))

    assert interpreter.is_halted


def test_ret_without_frame():
    with pytest.raises(InvalidReturnError):
        Interpreter().run(_RawChunk([Opcode.TRUE, Opcode.RET]))


def test_stack_underflow():
    with pytest.raises(StackUnderflowError):
        Interpreter().run(_RawChunk([Opcode.PRINT]))


def test_truncated_operand():
    with pytest.raises(InstructionPointerOutOfRangeError):
        Interpreter().run(_RawChunk([Opcode.JMP, 0]))


def test_jump_outside_code():
    with pytest.raises(InstructionPointerOutOfRangeError):
        Interpreter().run(_RawChunk([Opcode.JMP, 0xFF, 0xF0]))


def test_runs_off_the_end_without_exit():
    interpreter = Interpreter()
    interpreter.run(_RawChunk([Opcode.TRUE, Opcode.POP]))
    assert interpreter.is_halted
    assert interpreter.tos == 0


def test_exit_stops_execution(capsys):
    Interpreter().run(_RawChunk([Opcode.EXIT, Opcode.TRUE, Opcode.PRINT]))
    assert capsys.readouterr().out == ""


def test_stack_trace():
    source = "fn f() {\n  print y;\n}\nf();\n"
    interpreter = Interpreter()

    with pytest.raises(VariableNotDefinedError):
        interpreter.run(compile_source(source))

    assert [str(source_location) for source_location in interpreter.get_stack_trace()] \
           == ["t.vn:2:9", "t.vn:4:1"]


def test_free_releases_globals():
    interpreter = run("let x = 1;")
    interpreter.free()
    assert len(interpreter.global_table) == 0
    assert interpreter.tos == 0
