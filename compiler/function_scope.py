__all__ = (
    "FunctionScope",
)


import contextlib
import typing

from .error import LocalVariableExistsError, TooManyLocalVariablesError
from .source_location import SourceLocation


class FunctionScope:
    """Stack slots of the parameters and locals of the function being compiled.

    Slot N is addressed as ``stack[fp + N]`` at run time, so slots are handed
    out in declaration order and given back in reverse order when a block
    scope ends.
    """

    __slots__ = (
        "_max_local_variable_count",
        "_local_variable_names",
        "_block_scope_base",
    )

    def __init__(self, max_local_variable_count: int = 256) -> None:
        self._max_local_variable_count = max_local_variable_count
        self._local_variable_names: typing.List[str] = []
        self._block_scope_base = 0

    def create_local_variable(self, source_location: SourceLocation, variable_name: str) -> int:
        if variable_name in self._local_variable_names[self._block_scope_base:]:
            raise LocalVariableExistsError(source_location, variable_name)

        slot = len(self._local_variable_names)

        if slot >= self._max_local_variable_count:
            raise TooManyLocalVariablesError(source_location)

        self._local_variable_names.append(variable_name)
        return slot

    def find_local_variable(self, variable_name: str) -> typing.Optional[int]:
        for slot in range(len(self._local_variable_names) - 1, -1, -1):
            if self._local_variable_names[slot] == variable_name:
                return slot

        return None

    def get_local_variable_count(self) -> int:
        return len(self._local_variable_names)

    @contextlib.contextmanager
    def enter_block_scope(self) -> typing.ContextManager[None]:
        local_variable_count = len(self._local_variable_names)
        block_scope_base_backup = self._block_scope_base
        self._block_scope_base = local_variable_count

        try:
            yield
        finally:
            del self._local_variable_names[local_variable_count:]
            self._block_scope_base = block_scope_base_backup
