__all__ = (
    "MAX_POOL_SIZE",
    "ConstantTable",
    "TooManyConstantsException",
    "ConstantNotFoundException",
)


import typing


MAX_POOL_SIZE = 256

_Constant = typing.TypeVar("_Constant", float, str)


class ConstantTable(typing.Generic[_Constant]):
    """An append-only pool of constants addressed by one-byte ids.

    Adding a constant equal to one already present returns the existing id,
    so ids are stable for the lifetime of the table.
    """

    __slots__ = (
        "_size",
        "_constants",
        "_constant_2_constant_id",
    )

    def __init__(self, size: int = MAX_POOL_SIZE) -> None:
        self._size = size
        self._constants = []
        self._constant_2_constant_id = {}

    def add_constant(self, constant: _Constant) -> int:
        constant_id = self._constant_2_constant_id.get(constant, None)

        if constant_id is None:
            constant_id = len(self._constants)

            if constant_id == self._size:
                raise TooManyConstantsException()

            self._constants.append(constant)
            self._constant_2_constant_id[constant] = constant_id

        return constant_id

    def get_constant(self, constant_id: int) -> _Constant:
        if constant_id not in range(0, len(self._constants)):
            raise ConstantNotFoundException()

        return self._constants[constant_id]

    def get_constants(self) -> typing.List[_Constant]:
        return list(self._constants)

    def clear(self) -> None:
        self._constants.clear()
        self._constant_2_constant_id.clear()

    def __len__(self) -> int:
        return len(self._constants)


class TooManyConstantsException(Exception):
    pass


class ConstantNotFoundException(Exception):
    pass
