__all__ = (
    "DIGITS",
    "LETTERS",
    "WHITE_SPACES",
    "NAME_HEAD_CHARS",
    "NAME_CHARS",
    "ESCAPED_CHAR_2_CHAR",
)


DIGITS = frozenset("0123456789")
LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
WHITE_SPACES = frozenset(" \t\n\v\f\r")
NAME_HEAD_CHARS = LETTERS | {"_"}
NAME_CHARS = NAME_HEAD_CHARS | DIGITS

# char after the backslash -> char it stands for
ESCAPED_CHAR_2_CHAR = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "0": "\0",
    "\\": "\\",
    "\"": "\"",
}
