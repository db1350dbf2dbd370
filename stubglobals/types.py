from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Union

from typing_extensions import Protocol, TypeAlias

if TYPE_CHECKING:
    from stubglobals.stub import StubObject

AnyCallable = Callable[..., Any]
StubTarget: TypeAlias = Union[type, AnyCallable, str]
"""What a stub builds: a class, a factory callable or a dotted import path to either."""


@dataclass(frozen=True)
class TemplatedString:
    """Wrapper for strings which contain values that must be interpolated by the configuration store.

    Use this with the special ${config_value} syntax to reference a configuration in a formatted string.
    """

    __slots__ = ("value",)

    value: str


ConfigurationReference = Union[str, TemplatedString]


@dataclass(frozen=True)
class Unconstructed:
    """Slot state before first use: holds the stub that knows how to build the real object."""

    __slots__ = ("stub",)

    stub: StubObject


@dataclass(frozen=True)
class Constructed:
    """Slot state after unstubbing, or for slots bound directly to a value."""

    __slots__ = ("value",)

    value: Any


SlotState: TypeAlias = Union[Unconstructed, Constructed]


class LanguageLike(Protocol):
    """The parts of a language object the content language stub relies on."""

    def init_encoding(self) -> None: ...

    def init_cont_lang(self) -> None: ...


class RequestContextLike(Protocol):
    """Anything able to hand out the language of the current request."""

    def get_language(self) -> Any: ...
