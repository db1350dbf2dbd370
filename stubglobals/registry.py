from __future__ import annotations

import warnings
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator

from stubglobals.errors import DuplicateSlotError, SlotAlreadyConstructedError, UnknownSlotError, UnstubLoopError
from stubglobals.types import Constructed, SlotState, Unconstructed

if TYPE_CHECKING:
    from stubglobals.stub import StubObject

DEFAULT_RECURSION_LIMIT = 2


class UnstubGuard:
    """Counts unstub attempts currently in flight, across every slot of a registry.

    Constructing one real object may legitimately unstub another one, but nesting deeper than `limit`
    means a constructor is calling back into a stub that is still being replaced.
    """

    __slots__ = ("__level", "limit")

    def __init__(self, limit: int = DEFAULT_RECURSION_LIMIT) -> None:
        if limit < 1:
            msg = f"Unstub recursion limit must be at least 1, got {limit}."
            raise ValueError(msg)

        self.limit = limit
        self.__level = 0

    @property
    def level(self) -> int:
        return self.__level

    @contextmanager
    def enter(self, slot_name: str, operation: str, caller: str) -> Iterator[int]:
        """Hold one level of nesting for the duration of the block.

        The level is released on every exit path. When entering would go past the limit
        `UnstubLoopError` is raised and the level is left untouched.
        """
        if self.__level + 1 > self.limit:
            raise UnstubLoopError(slot_name, operation, caller)

        self.__level += 1
        try:
            yield self.__level
        finally:
            self.__level -= 1


class SlotRegistry:
    """Process-wide table of named global slots.

    Each slot holds either the stub installed at setup time or, once something used it, the real object.
    """

    __slots__ = ("__cells", "__installed", "guard")

    def __init__(self, recursion_limit: int = DEFAULT_RECURSION_LIMIT) -> None:
        self.__cells: dict[str, SlotState] = {}
        self.__installed: dict[str, StubObject] = {}
        self.guard = UnstubGuard(recursion_limit)

    def install(self, stub: StubObject, *, replace: bool = False) -> None:
        """Bind the slot named by `stub` to the stub itself.

        :param stub: The stub to install. It must have been created for this registry.
        :param replace: Rebind the slot when it already exists instead of raising.
        """
        name = stub.slot_name

        if stub.registry is not self:
            msg = f"Stub for slot '{name}' belongs to a different registry."
            raise ValueError(msg)

        if name in self.__cells:
            if not replace:
                raise DuplicateSlotError(name)

            if isinstance(self.__cells[name], Constructed):
                warnings.warn(
                    f"Replacing already constructed global '{name}' with a stub. "
                    "Code holding the real object will not see the new one.",
                    stacklevel=2,
                )

        self.__cells[name] = Unconstructed(stub)
        self.__installed[name] = stub

    def set(self, name: str, value: Any) -> None:
        """Bind `name` straight to a real value. The slot will never be stubbed."""
        self.__cells[name] = Constructed(value)
        self.__installed.pop(name, None)

    def state(self, name: str) -> SlotState:
        if name not in self.__cells:
            raise UnknownSlotError(name)

        return self.__cells[name]

    def get(self, name: str) -> Any:
        """Return the current occupant of the slot: the stub or the real object."""
        state = self.state(name)

        return state.stub if isinstance(state, Unconstructed) else state.value

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.__cells

    def names(self) -> list[str]:
        return list(self.__cells)

    def is_constructed(self, name: str) -> bool:
        return isinstance(self.state(name), Constructed)

    def store(self, name: str, value: Any) -> None:
        """Replace the stub in `name` with the real object. A slot transitions only once."""
        if isinstance(self.state(name), Constructed):
            raise SlotAlreadyConstructedError(name)

        self.__cells[name] = Constructed(value)

    def reset(self, name: str) -> None:
        """Put the originally installed stub back. Slots bound with `set` are left alone."""
        if name not in self.__cells:
            raise UnknownSlotError(name)

        if name in self.__installed:
            self.__cells[name] = Unconstructed(self.__installed[name])

    def uninstall(self, name: str) -> None:
        if name not in self.__cells:
            raise UnknownSlotError(name)

        del self.__cells[name]
        self.__installed.pop(name, None)

    def clear(self) -> None:
        """Drop every slot."""
        self.__cells.clear()
        self.__installed.clear()

    @contextmanager
    def override(self, name: str, new: Any) -> Iterator[None]:
        """Bind `name` to `new` for the duration of the context manager, then restore the previous state."""
        previous = self.__cells.get(name)
        self.__cells[name] = Constructed(new)
        try:
            yield
        finally:
            if previous is None:
                self.__cells.pop(name, None)
            else:
                self.__cells[name] = previous


_registry = SlotRegistry()


def get_registry() -> SlotRegistry:
    """Return the process-wide registry used by stubs created without an explicit one."""
    return _registry


def set_registry(registry: SlotRegistry) -> SlotRegistry:
    """Swap the process-wide registry, returning the previous one."""
    global _registry  # noqa: PLW0603

    previous, _registry = _registry, registry

    return previous
