__all__ = (
    "Scanner",
)


import io
import typing

from . import utils
from .error import EndOfFileError, UnexpectedCharError
from .source_location import SourceLocation
from .token import *


class Scanner:
    """Splits Venom source text into tokens, white spaces and comments
    included; the parser decides what to skip."""

    __slots__ = (
        "_source",
        "_file_name",
        "_position",
        "_line_number",
        "_column_number",
    )

    def __init__(self, input_stream: io.IOBase, file_name: typing.Optional[str] = None) -> None:
        self._source = input_stream.read()
        self._file_name = getattr(input_stream, "name", "<unnamed>") if file_name is None \
                                                                      else file_name
        self._position = 0
        self._line_number = 1
        self._column_number = 1

    def get_token(self) -> Token:
        char = self._peek_char(0)

        if char == "":
            return Token(BasicTokenType.NO, "", self.get_source_location())
        elif char in utils.WHITE_SPACES:
            return self._scan_white_space()
        elif char in utils.DIGITS or (char == "." and self._peek_char(1) in utils.DIGITS):
            return self._scan_number_literal()
        elif char == "\"":
            return self._scan_string_literal()
        elif char in utils.NAME_HEAD_CHARS:
            return self._scan_name()
        elif self._looking_at("//"):
            return self._scan_line_comment()
        elif self._looking_at("/*"):
            return self._scan_block_comment()
        else:
            return self._scan_punctuator()

    def get_source_location(self) -> SourceLocation:
        return SourceLocation(self._file_name, self._line_number, self._column_number)

    def _scan_white_space(self) -> Token:
        source_location = self.get_source_location()
        start = self._position

        while self._peek_char(0) in utils.WHITE_SPACES:
            self._advance()

        return Token(BasicTokenType.WHITE_SPACE, self._source[start:self._position]
                     , source_location)

    def _scan_number_literal(self) -> Token:
        source_location = self.get_source_location()
        start = self._position
        self._skip_digits()

        if self._peek_char(0) == ".":
            self._advance()
            self._skip_digits()

        if self._peek_char(0) in ("e", "E"):
            self._advance()

            if self._peek_char(0) in ("+", "-"):
                self._advance()

            self._expect_char(utils.DIGITS)
            self._skip_digits()

        return Token(BasicTokenType.NUMBER_LITERAL, self._source[start:self._position]
                     , source_location)

    def _skip_digits(self) -> None:
        while self._peek_char(0) in utils.DIGITS:
            self._advance()

    def _scan_string_literal(self) -> Token:
        source_location = self.get_source_location()
        start = self._position
        self._advance()

        while True:
            char = self._peek_char(0)

            if char == "\"":
                break

            if char in ("\n", ""):
                self._unexpect_char(char)

            self._advance()

            if char == "\\":
                self._expect_char(utils.ESCAPED_CHAR_2_CHAR.keys())

        self._advance()
        return Token(BasicTokenType.STRING_LITERAL, self._source[start:self._position]
                     , source_location)

    def _scan_name(self) -> Token:
        source_location = self.get_source_location()
        start = self._position

        while self._peek_char(0) in utils.NAME_CHARS:
            self._advance()

        name = self._source[start:self._position]
        token_type = KEYWORD_2_BASIC_TOKEN_TYPE.get(name, BasicTokenType.IDENTIFIER)
        return Token(token_type, name, source_location)

    def _scan_line_comment(self) -> Token:
        source_location = self.get_source_location()
        start = self._position

        while self._peek_char(0) not in ("\n", ""):
            self._advance()

        return Token(BasicTokenType.COMMENT, self._source[start:self._position], source_location)

    def _scan_block_comment(self) -> Token:
        source_location = self.get_source_location()
        start = self._position
        self._advance(2)

        while not self._looking_at("*/"):
            self._advance()

        self._advance(2)
        return Token(BasicTokenType.COMMENT, self._source[start:self._position], source_location)

    def _scan_punctuator(self) -> Token:
        source_location = self.get_source_location()

        for punctuator in _PUNCTUATORS:
            if self._looking_at(punctuator):
                self._advance(len(punctuator))
                return Token(ExtraTokenType(punctuator), punctuator, source_location)

        self._unexpect_char(self._peek_char(0))

    def _looking_at(self, chars: str) -> bool:
        return self._source.startswith(chars, self._position)

    def _peek_char(self, offset: int) -> str:
        position = self._position + offset
        return self._source[position] if position < len(self._source) else ""

    def _expect_char(self, expected_chars: typing.Container[str]) -> str:
        char = self._peek_char(0)

        if char == "" or char not in expected_chars:
            self._unexpect_char(char)

        return self._advance()

    def _advance(self, number_of_chars: int = 1) -> str:
        chars = self._source[self._position:self._position + number_of_chars]

        for char in chars:
            if char == "\n":
                self._line_number += 1
                self._column_number = 1
            else:
                self._column_number += 1

        self._position += len(chars)

        if len(chars) < number_of_chars:
            raise EndOfFileError(self.get_source_location())

        return chars

    def _unexpect_char(self, char: str) -> typing.NoReturn:
        if char == "":
            raise EndOfFileError(self.get_source_location())

        raise UnexpectedCharError(self.get_source_location(), char)


# Longest first so that `<=` is not read as `<` `=`.
_PUNCTUATORS: typing.List[str] = sorted((token_type.value for token_type in ExtraTokenType)
                                      , key = len, reverse = True)
