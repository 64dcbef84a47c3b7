__all__ = (
    "SourceLocation",
)


import typing


class SourceLocation(typing.NamedTuple):
    """Where a token starts; lines and columns count from 1."""

    file_name: str
    line_number: int
    column_number: int

    def __str__(self) -> str:
        return "{}:{}:{}".format(*self)
