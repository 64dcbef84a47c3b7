__all__ = (
    "BasicTokenType",
    "ExtraTokenType",
    "TokenType",
    "Token",
    "KEYWORD_2_BASIC_TOKEN_TYPE",
)


import enum
import typing

from .source_location import SourceLocation


class BasicTokenType(enum.IntEnum):
    NO = 0

    COMMENT = enum.auto()
    WHITE_SPACE = enum.auto()
    NUMBER_LITERAL = enum.auto()
    STRING_LITERAL = enum.auto()
    IDENTIFIER = enum.auto()

    ELSE_KEYWORD = enum.auto()
    FALSE_KEYWORD = enum.auto()
    FN_KEYWORD = enum.auto()
    IF_KEYWORD = enum.auto()
    LET_KEYWORD = enum.auto()
    NULL_KEYWORD = enum.auto()
    PRINT_KEYWORD = enum.auto()
    RETURN_KEYWORD = enum.auto()
    TRUE_KEYWORD = enum.auto()
    WHILE_KEYWORD = enum.auto()

    @property
    def keyword(self) -> typing.Optional[str]:
        if not self.name.endswith("_KEYWORD"):
            return None

        return self.name[:-len("_KEYWORD")].lower()

    def __str__(self) -> str:
        if self is BasicTokenType.NO:
            return "<end-of-file>"

        keyword = self.keyword

        if keyword is None:
            return "<{}>".format(self.name.lower().replace("_", "-"))

        return "keyword '{}'".format(keyword)


class ExtraTokenType(enum.Enum):
    """Punctuators, looked up by spelling: ``ExtraTokenType("<=")``."""

    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="
    EQUAL_EQUAL = "=="
    BANG_EQUAL = "!="
    LESS = "<"
    GREATER = ">"
    EQUAL = "="
    BANG = "!"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    PERCENT = "%"
    COMMA = ","
    SEMICOLON = ";"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"

    def __str__(self) -> str:
        return "`{}`".format(self.value)


TokenType = typing.Union[BasicTokenType, ExtraTokenType]


class Token(typing.NamedTuple):
    type: TokenType
    data: str
    source_location: SourceLocation


KEYWORD_2_BASIC_TOKEN_TYPE: typing.Dict[str, BasicTokenType] = {
    token_type.keyword: token_type for token_type in BasicTokenType
    if token_type.keyword is not None
}
