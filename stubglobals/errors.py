from __future__ import annotations

from typing import Any


class StubGlobalsError(Exception):
    """Base type for all exceptions raised by stubglobals."""


class UnstubLoopError(StubGlobalsError):
    """Raised when constructing a real object re-enters unstubbing past the allowed nesting depth.

    This points at a wiring bug: a constructor transitively calls back into a stub which
    has not been replaced yet. It is not meant to be recovered from locally.
    """

    def __init__(self, slot_name: str, operation: str, caller: str) -> None:
        self.slot_name = slot_name
        self.operation = operation
        self.caller = caller

        super().__init__(f"Unstub loop detected on call of ${slot_name}->{operation} from {caller}")


class UnknownSlotError(StubGlobalsError):
    """Raised when requesting a slot by name which does not exist."""

    def __init__(self, slot_name: str) -> None:
        self.slot_name = slot_name
        super().__init__(f"Unknown global slot requested: {slot_name}")


class DuplicateSlotError(StubGlobalsError):
    """Raised when installing a stub into a slot that is already bound."""

    def __init__(self, slot_name: str) -> None:
        self.slot_name = slot_name
        super().__init__(
            f"Cannot install a stub for slot '{slot_name}' as it already exists. "
            "Pass replace=True to rebind it."
        )


class UnknownStubTargetError(StubGlobalsError):
    """Raised when the target of a stub cannot be resolved to a callable."""

    def __init__(self, target: Any) -> None:
        self.target = target
        super().__init__(f"Cannot resolve stub target {target!r}. Expected a type, a callable or a dotted import path.")


class MissingStubTargetError(StubGlobalsError):
    """Raised when a plain stub without a target type is asked to build its real object."""

    def __init__(self, slot_name: str) -> None:
        self.slot_name = slot_name
        super().__init__(f"Stub for slot '{slot_name}' has no target type and does not override _new_object.")


class UnknownConfigKeyError(StubGlobalsError):
    """Raised when requesting a configuration key which does not exist."""

    def __init__(self, name: str, parent_path: str | None = None) -> None:
        self.name = name
        self.parent_path = parent_path

        where = f" under '{parent_path}'" if parent_path else ""
        super().__init__(f"Unknown configuration key requested: {name}{where}")


class SlotAlreadyConstructedError(StubGlobalsError):
    """Raised when storing a real object into a slot which already holds one."""

    def __init__(self, slot_name: str) -> None:
        self.slot_name = slot_name
        super().__init__(
            f"Global slot '{slot_name}' already holds its real object. Use set() to rebind it explicitly."
        )
