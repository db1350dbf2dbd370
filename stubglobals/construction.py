from __future__ import annotations

import functools
import importlib
from typing import TYPE_CHECKING, Any

from stubglobals.errors import UnknownStubTargetError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from stubglobals.types import AnyCallable, StubTarget


@functools.lru_cache(maxsize=None)
def _import_target(path: str) -> Any:
    if ":" in path:
        module_name, _, attr_path = path.partition(":")
    else:
        module_name, _, attr_path = path.rpartition(".")

    if not module_name or not attr_path:
        raise UnknownStubTargetError(path)

    try:
        obj: Any = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            obj = getattr(obj, attr)
    except (ImportError, AttributeError) as e:
        raise UnknownStubTargetError(path) from e

    return obj


def resolve_target(target: StubTarget) -> AnyCallable:
    """Turn a stub target into something that can be called to build the real object.

    Strings are treated as import paths, either `package.module.Name` or `package.module:Name.attr`.
    """
    obj = _import_target(target) if isinstance(target, str) else target

    if not callable(obj):
        raise UnknownStubTargetError(target)

    return obj


def new_object(target: StubTarget, args: Sequence[Any] = ()) -> Any:
    """Create a new instance of `target` passing `args` positionally.

    Whatever the constructor raises is propagated unchanged.
    """
    return resolve_target(target)(*args)
