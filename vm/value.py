__all__ = (
    "ValueType",
    "Function",
    "ValueData",
    "Value",
)


import enum
import typing


class ValueType(enum.IntEnum):
    NUMBER = enum.auto()
    BOOLEAN = enum.auto()
    STRING = enum.auto()
    FUNCTION = enum.auto()
    POINTER = enum.auto()
    NULL = enum.auto()

    def __str__(self) -> str:
        return _VALUE_TYPE_2_NAME[self]


class Function(typing.NamedTuple):
    location: int
    name: str
    arity: int


ValueData = typing.Union[
    None,
    bool,
    float,
    str,
    Function,
    int,
]


class Value:
    __slots__ = (
        "_type",
        "_data",
    )

    def __init__(self, type_: ValueType, data: ValueData) -> None:
        self._type = type_
        self._data = data

    @classmethod
    def number(cls, number: float) -> "Value":
        return cls(ValueType.NUMBER, float(number))

    @classmethod
    def boolean(cls, boolean: bool) -> "Value":
        return cls(ValueType.BOOLEAN, bool(boolean))

    @classmethod
    def string(cls, string: str) -> "Value":
        return cls(ValueType.STRING, string)

    @classmethod
    def function(cls, function: Function) -> "Value":
        return cls(ValueType.FUNCTION, function)

    @classmethod
    def pointer(cls, code_offset: int) -> "Value":
        return cls(ValueType.POINTER, code_offset)

    @classmethod
    def null(cls) -> "Value":
        return cls(ValueType.NULL, None)

    @property
    def type(self) -> ValueType:
        return self._type

    @property
    def data(self) -> ValueData:
        return self._data

    def __str__(self) -> str:
        if self._type is ValueType.NUMBER:
            return "%f" % self._data
        elif self._type is ValueType.BOOLEAN:
            return "true" if self._data else "false"
        elif self._type is ValueType.STRING:
            return self._data
        elif self._type is ValueType.FUNCTION:
            return "<fn {}>".format(self._data.name)
        elif self._type is ValueType.POINTER:
            return "<pointer {}>".format(self._data)
        else:
            return "null"

    def __repr__(self) -> str:
        return "Value({}, {!r})".format(self._type.name, self._data)


_VALUE_TYPE_2_NAME: typing.Dict[ValueType, str] = {
    ValueType.NUMBER: "number",
    ValueType.BOOLEAN: "bool",
    ValueType.STRING: "str",
    ValueType.FUNCTION: "function",
    ValueType.POINTER: "pointer",
    ValueType.NULL: "null",
}
