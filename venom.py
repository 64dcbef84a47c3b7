import io
import sys
import typing

from compiler.bytecode_generator import BytecodeGenerator
from compiler.error import Error as CompilerError
from compiler.parser import Parser
from compiler.scanner import Scanner
from vm.bytecode import Opcode, get_instruction_length
from vm.chunk import Chunk
from vm.error import Error as VMError
from vm.interpreter import Interpreter
from vm.value import Value


class Venom:
    def __init__(self, max_stack_depth: int = None, max_frame_depth: int = None) -> None:
        self._max_stack_depth = _MAX_STACK_DEPTH if max_stack_depth is None else max_stack_depth
        self._max_frame_depth = _MAX_FRAME_DEPTH if max_frame_depth is None else max_frame_depth

    def run_script(self, file_path: str) -> None:
        source = self._read_script(file_path)
        self.run_source(source, file_path)

    def run_source(self, source: str, file_name: str = "<string>") -> None:
        chunk = self._compile_script(io.StringIO(source), file_name)
        interpreter = Interpreter(self._max_stack_depth, self._max_frame_depth)

        try:
            interpreter.run(chunk)
        except VMError as error:
            message = self._get_stack_trace_string(interpreter)
            message += "runtime error: " + str(error) + "."
            raise SystemExit(message)
        finally:
            interpreter.free()
            chunk.free()

    def dump_bytecode(self, file_path: str) -> None:
        source = self._read_script(file_path)
        chunk = self._compile_script(io.StringIO(source), file_path)

        for instruction_offset, opcode, operands in chunk.get_instructions(0):
            if not isinstance(opcode, Opcode):
                print("{}: <unknown {:#04x}>".format(instruction_offset, opcode))
                continue

            print("{}: {}".format(instruction_offset, opcode.name), end = "")

            if len(operands) >= 1:
                print(" " + ", ".join(str(operand) for operand in operands), end = "")

            comment = self._get_instruction_comment(chunk, instruction_offset, opcode, operands)

            if comment is not None:
                print(" # {}".format(comment), end = "")

            print("")

        chunk.free()

    def _get_instruction_comment(self, chunk: Chunk, instruction_offset: int, opcode: Opcode
                                 , operands: typing.Tuple[int, ...]) -> typing.Optional[str]:
        if opcode is Opcode.CONST:
            return str(Value.number(chunk.get_constant(operands[0])))

        if opcode in (Opcode.STR, Opcode.SET_GLOBAL, Opcode.GET_GLOBAL, Opcode.FUNC
                      , Opcode.INVOKE):
            return repr(chunk.get_string(operands[0]))

        if opcode in (Opcode.JMP, Opcode.JZ):
            return "-> {}".format(instruction_offset + get_instruction_length(opcode)
                                  + operands[0])

        return None

    def _get_stack_trace_string(self, interpreter: Interpreter) -> str:
        stack_trace = interpreter.get_stack_trace()

        if len(stack_trace) == 0:
            string = ""
        else:
            string = "stack trace:\n"

            for source_location in reversed(stack_trace):
                string += "\tat " + str(source_location) + "\n"

        return string

    def _read_script(self, file_path: str) -> str:
        try:
            with open(file_path, "r") as f:
                return f.read()
        except (OSError, UnicodeDecodeError):
            print("Could not open file \"{}\".".format(file_path), file = sys.stderr)
            raise SystemExit(_EXIT_CODE_IO_ERROR)

    def _compile_script(self, input_stream: io.IOBase, file_name: str) -> Chunk:
        scanner = Scanner(input_stream, file_name)
        parser = Parser(scanner)
        bytecode_generator = BytecodeGenerator()
        chunk = Chunk()

        try:
            bytecode_generator.compile_program(chunk, parser.get_program())
        except CompilerError as error:
            chunk.free()
            raise SystemExit("compilation error: " + str(error))

        return chunk


_MAX_STACK_DEPTH = 256
_MAX_FRAME_DEPTH = 256
_EXIT_CODE_IO_ERROR = 74


def main(argv: typing.Optional[typing.List[str]] = None) -> None:
    if argv is None:
        argv = sys.argv

    if not (len(argv) == 2 and argv[1] != "-d" or len(argv) == 3 and argv[1] == "-d"):
        message = """\
usage: {} [-d] <file>
options:
     -d dump byte codes
""".format(argv[0] if len(argv) >= 1 else "venom")
        raise SystemExit(message)

    venom = Venom()

    if argv[1] == "-d":
        venom.dump_bytecode(argv[2])
    else:
        venom.run_script(argv[1])


if __name__ == "__main__":
    main()
