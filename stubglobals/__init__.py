from stubglobals.bootstrap import create_registry, install_language_stubs
from stubglobals.config import ConfigStore
from stubglobals.errors import (
    DuplicateSlotError,
    SlotAlreadyConstructedError,
    StubGlobalsError,
    UnknownSlotError,
    UnstubLoopError,
)
from stubglobals.language_stubs import ContentLanguageStub, UserLanguageStub
from stubglobals.registry import SlotRegistry, UnstubGuard, get_registry, set_registry
from stubglobals.stub import StubObject, forwarding_stub
from stubglobals.types import Constructed, TemplatedString, Unconstructed

__all__ = [
    "ConfigStore",
    "Constructed",
    "ContentLanguageStub",
    "DuplicateSlotError",
    "SlotAlreadyConstructedError",
    "SlotRegistry",
    "StubGlobalsError",
    "StubObject",
    "TemplatedString",
    "Unconstructed",
    "UnknownSlotError",
    "UnstubGuard",
    "UnstubLoopError",
    "UserLanguageStub",
    "create_registry",
    "forwarding_stub",
    "get_registry",
    "install_language_stubs",
    "set_registry",
]
