__all__ = (
    "GlobalTable",
)


import typing

from .value import Value


class GlobalTable:
    """Name to value bindings shared by variables and function definitions."""

    __slots__ = (
        "_name_2_value",
    )

    def __init__(self) -> None:
        self._name_2_value = {}

    def insert(self, name: str, value: Value) -> None:
        self._name_2_value[name] = value

    def lookup(self, name: str) -> typing.Optional[Value]:
        return self._name_2_value.get(name)

    def get_names(self) -> typing.List[str]:
        return list(self._name_2_value.keys())

    def clear(self) -> None:
        self._name_2_value.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._name_2_value

    def __len__(self) -> int:
        return len(self._name_2_value)
