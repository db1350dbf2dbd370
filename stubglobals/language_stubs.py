from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from stubglobals.language import Language, RequestContext
from stubglobals.stub import StubObject

if TYPE_CHECKING:
    from stubglobals.config import ConfigStore
    from stubglobals.registry import SlotRegistry
    from stubglobals.types import LanguageLike, RequestContextLike

CONTENT_LANGUAGE_SLOT = "wgContLang"
USER_LANGUAGE_SLOT = "wgLang"
LANGUAGE_CODE_KEY = "language_code"


class ContentLanguageStub(StubObject):
    """Stub for the content language of the site.

    The language code is read from configuration when the real object is first needed, not when the stub is made.
    """

    __slots__ = ("_config", "_language_factory")

    def __init__(
        self,
        config: ConfigStore,
        language_factory: Callable[[str], LanguageLike] = Language.factory,
        slot_name: str = CONTENT_LANGUAGE_SLOT,
        registry: SlotRegistry | None = None,
    ) -> None:
        super().__init__(slot_name, Language, registry=registry)
        self._set_field("_config", config)
        self._set_field("_language_factory", language_factory)

    def _new_object(self) -> Any:
        obj = self._language_factory(self._config.get(LANGUAGE_CODE_KEY))
        obj.init_encoding()
        obj.init_cont_lang()

        return obj


class UserLanguageStub(StubObject):
    """Stub for the language of the current user.

    The real object is not built here but borrowed from the request context, which knows about user
    preferences and per-request overrides.
    """

    __slots__ = ("_context_supplier",)

    def __init__(
        self,
        context_supplier: Callable[[], RequestContextLike] = RequestContext.get_main,
        slot_name: str = USER_LANGUAGE_SLOT,
        registry: SlotRegistry | None = None,
    ) -> None:
        super().__init__(slot_name, Language, registry=registry)
        self._set_field("_context_supplier", context_supplier)

    def _new_object(self) -> Any:
        return self._context_supplier().get_language()
