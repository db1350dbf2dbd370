"""Stub objects: cheap placeholders installed into global slots in place of expensive objects.

The first real use of a stub builds the real object, stores it into the slot the stub was installed in and
forwards the operation to it. Code that looks the slot up again gets the real object directly.

Callers still holding the stub keep working: every forwarded operation re-reads the slot.

Unstub loops happen when a constructor calls something that in turn uses the stub being replaced.
Keep constructors lightweight and defer anything which depends on other globals. As a last resort,
`StubObject.is_real_object` can be used to break the loop.
"""

from __future__ import annotations

import abc
import functools
import inspect
import math
import operator
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from stubglobals.construction import new_object
from stubglobals.diagnostics import debug, get_caller, profile_scope
from stubglobals.errors import MissingStubTargetError
from stubglobals.registry import get_registry
from stubglobals.types import Constructed

if TYPE_CHECKING:
    from collections.abc import Sequence

    from stubglobals.registry import SlotRegistry
    from stubglobals.types import StubTarget

T = TypeVar("T")


def _invoke(real: Any, *args: Any, **kwargs: Any) -> Any:
    return real(*args, **kwargs)


# Special methods are looked up on the type, so __getattr__ never sees them. These go through the
# builtin which would have dispatched them, keeping its fallbacks (iterating via __getitem__ and so on).
# Equality, hashing and truthiness stay on the stub so checking a stub never builds it.
_BUILTIN_SPECIAL_METHODS: dict[str, Callable[..., Any]] = {
    "__call__": _invoke,
    "__len__": len,
    "__iter__": iter,
    "__next__": next,
    "__reversed__": reversed,
    "__contains__": operator.contains,
    "__getitem__": operator.getitem,
    "__setitem__": operator.setitem,
    "__delitem__": operator.delitem,
    "__str__": str,
    "__bytes__": bytes,
    "__format__": format,
    "__int__": int,
    "__float__": float,
    "__complex__": complex,
    "__index__": operator.index,
    "__round__": round,
    "__trunc__": math.trunc,
    "__floor__": math.floor,
    "__ceil__": math.ceil,
    "__neg__": operator.neg,
    "__pos__": operator.pos,
    "__abs__": abs,
    "__invert__": operator.invert,
}

# No builtin to go through: called on the real object's type, TypeError when it does not define them.
_PROTOCOL_SPECIAL_METHODS = ("__enter__", "__exit__")

# Operators answer NotImplemented when the real object lacks them, so Python can try the other operand
# or fall back from an in-place operator to the plain one.
_FORWARDED_OPERATORS = (
    "__length_hint__",
    "__lt__",
    "__le__",
    "__gt__",
    "__ge__",
    *(
        f"__{prefix}{op}__"
        for op in (
            "add",
            "sub",
            "mul",
            "matmul",
            "truediv",
            "floordiv",
            "mod",
            "divmod",
            "pow",
            "lshift",
            "rshift",
            "and",
            "xor",
            "or",
        )
        for prefix in ("", "r", "i")
        if not (prefix == "i" and op == "divmod")
    ),
)

# Never generated from an interface: object plumbing, or kept on the stub itself.
_NOT_FORWARDED = frozenset(
    (
        "__init__",
        "__new__",
        "__init_subclass__",
        "__getattr__",
        "__getattribute__",
        "__setattr__",
        "__delattr__",
        "__repr__",
        "__eq__",
        "__ne__",
        "__hash__",
        "__bool__",
        "__copy__",
        "__deepcopy__",
        "__reduce__",
        "__reduce_ex__",
        "__getstate__",
        "__setstate__",
        "__subclasshook__",
        "__class_getitem__",
        "__instancecheck__",
        "__subclasscheck__",
        "__set_name__",
        "__del__",
        "__dir__",
        "__sizeof__",
    )
)


@functools.lru_cache(maxsize=None)
def _stub_fields(cls: type) -> frozenset[str]:
    return frozenset(field for klass in cls.__mro__ for field in getattr(klass, "__slots__", ()))


class StubObject:
    """Placeholder for the object living in a global slot until something uses it.

    Attributes which are not defined on the stub are looked up on the real object, building it first.
    Names defined here (`slot_name`, `registry`, `unstub`, ...) shadow those of the real object, so call
    `StubObject.resolve` first when those are needed.
    """

    __slots__ = ("_constructor_args", "_registry", "_slot_name", "_target_type")

    def __init__(
        self,
        slot_name: str,
        target_type: StubTarget | None = None,
        constructor_args: Sequence[Any] = (),
        registry: SlotRegistry | None = None,
    ) -> None:
        """Create a stub. Nothing is built and the slot is not touched.

        :param slot_name: Name of the global slot this stub stands in for.
        :param target_type: Class, factory or dotted import path of the real object.
        :param constructor_args: Positional arguments to pass when building the real object.
        :param registry: Registry holding the slot. Defaults to the process-wide one.
        """
        self._set_field("_slot_name", slot_name)
        self._set_field("_target_type", target_type)
        self._set_field("_constructor_args", tuple(constructor_args))
        self._set_field("_registry", get_registry() if registry is None else registry)

    def _set_field(self, name: str, value: Any) -> None:
        object.__setattr__(self, name, value)

    @property
    def slot_name(self) -> str:
        return self._slot_name

    @property
    def target_type(self) -> StubTarget | None:
        return self._target_type

    @property
    def constructor_args(self) -> tuple[Any, ...]:
        return self._constructor_args

    @property
    def registry(self) -> SlotRegistry:
        return self._registry

    @staticmethod
    def is_real_object(obj: Any) -> bool:
        """Return True if `obj` is anything but a stub. Never triggers construction."""
        return not isinstance(obj, StubObject)

    @staticmethod
    def unstub(obj: Any) -> None:
        """Build and install the real object behind `obj` if it is a stub. No-op for anything else."""
        if isinstance(obj, StubObject):
            obj._unstub("unstub", 2)

    @staticmethod
    def resolve(obj: Any) -> Any:
        """Return the real object behind `obj`, building it if needed. Non-stubs are returned unchanged."""
        if not isinstance(obj, StubObject):
            return obj

        obj._unstub("resolve", 2)

        return obj._real()

    def _real(self) -> Any:
        return self._registry.get(self._slot_name)

    def _call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Unstub, then call method `name` on whatever now occupies the slot."""
        self._unstub(name, 2)

        return getattr(self._real(), name)(*args, **kwargs)

    def _new_object(self) -> Any:
        """Build the real object. Subclasses override this to change how it is made."""
        if self._target_type is None:
            raise MissingStubTargetError(self._slot_name)

        return new_object(self._target_type, self._constructor_args)

    def _unstub(self, name: str = "_unstub", level: int = 1) -> Any:
        """Replace this stub in its slot with the real object and return it.

        :param name: Operation which triggered the unstub, for diagnostics.
        :param level: How many frames above this method the code to blame for the unstub sits.
        """
        slot_name = self._slot_name
        registry = self._registry
        state = registry.state(slot_name)

        if isinstance(state, Constructed):
            return state.value

        target = self._target_type
        if isinstance(target, type) and isinstance(state.stub, target):
            return state.stub

        with profile_scope(f"StubObject._unstub-{slot_name}"):
            caller = get_caller(level)

            with registry.guard.enter(slot_name, name, caller):
                debug("Unstubbing $%s on call of $%s::%s from %s", slot_name, slot_name, name, caller)
                obj = self._new_object()

                # A nested unstub finished the job while we were building.
                current = registry.state(slot_name)
                if isinstance(current, Constructed):
                    debug("Discarding duplicate $%s built on call of %s", slot_name, name)
                    return current.value

                registry.store(slot_name, obj)

        return obj

    def __getattr__(self, name: str) -> Any:
        if name in _stub_fields(type(self)):
            raise AttributeError(name)

        self._unstub(name, 2)

        return getattr(self._real(), name)

    def __setattr__(self, name: str, value: Any) -> None:
        # Fields are only written while a stub is being set up, e.g. by copy.
        if name in _stub_fields(type(self)):
            object.__setattr__(self, name, value)
            return

        self._unstub("__setattr__", 2)
        setattr(self._real(), name, value)

    def __delattr__(self, name: str) -> None:
        self._unstub("__delattr__", 2)
        delattr(self._real(), name)

    def __bool__(self) -> bool:
        # Without this, bool() would fall back to the forwarded __len__.
        return True

    def __copy__(self) -> StubObject:
        """Copy the stub, not the real object. The copy stands in for the same slot."""
        clone = object.__new__(type(self))
        for field in _stub_fields(type(self)):
            object.__setattr__(clone, field, object.__getattribute__(self, field))

        return clone

    def __deepcopy__(self, memo: dict[int, Any]) -> StubObject:
        return self.__copy__()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} ${self._slot_name} target={self._target_type!r}>"


def _forward_special_method(name: str, template: Callable[..., Any] | None = None) -> Callable[..., Any]:
    builtin = _BUILTIN_SPECIAL_METHODS.get(name)
    is_operator = name in _FORWARDED_OPERATORS

    def method(self: StubObject, *args: Any, **kwargs: Any) -> Any:
        self._unstub(name, 2)
        real = self._real()

        if builtin is not None:
            return builtin(real, *args, **kwargs)

        impl = getattr(type(real), name, None)
        if impl is None:
            if is_operator:
                return NotImplemented

            msg = f"'{type(real).__name__}' object does not support {name}"
            raise TypeError(msg)

        return impl(real, *args, **kwargs)

    if template is None:
        method.__name__ = name
        method.__qualname__ = f"StubObject.{name}"
    else:
        functools.update_wrapper(method, template)
        method.__isabstractmethod__ = False  # type: ignore[attr-defined]

    return method


for _name in (*_BUILTIN_SPECIAL_METHODS, *_PROTOCOL_SPECIAL_METHODS, *_FORWARDED_OPERATORS):
    setattr(StubObject, _name, _forward_special_method(_name))

del _name


def _forward_method(name: str, template: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(template)
    def method(self: StubObject, *args: Any, **kwargs: Any) -> Any:
        self._unstub(name, 2)

        return getattr(self._real(), name)(*args, **kwargs)

    method.__isabstractmethod__ = False  # type: ignore[attr-defined]

    return method


def _is_special(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


_forwarding_stubs: dict[tuple[type, type[StubObject]], type[StubObject]] = {}


def forwarding_stub(interface: type[T], base: type[StubObject] = StubObject) -> type[StubObject]:
    """Create a stub class which defines a forwarding method for each method of `interface`.

    Public methods and special methods the interface declares are forwarded. Forwarding methods carry the
    name, docstring and signature of the interface method, so the stub can be inspected and type checked
    like the real thing. When `interface` is an ABC the stub class is registered as a virtual subclass of it.

    Classes are cached per (interface, base) pair.
    """
    key = (interface, base)
    if key in _forwarding_stubs:
        return _forwarding_stubs[key]

    namespace: dict[str, Any] = {"__slots__": (), "__module__": interface.__module__}

    for name, member in inspect.getmembers(interface, predicate=inspect.isfunction):
        if _is_special(name):
            if name not in _NOT_FORWARDED:
                namespace[name] = _forward_special_method(name, member)
        elif not name.startswith("_") and not hasattr(base, name):
            namespace[name] = _forward_method(name, member)

    stub_class = type(f"{interface.__name__}Stub", (base,), namespace)

    if isinstance(interface, abc.ABCMeta):
        interface.register(stub_class)

    _forwarding_stubs[key] = stub_class

    return stub_class
