from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from stubglobals.language import Language, RequestContext
from stubglobals.language_stubs import ContentLanguageStub, UserLanguageStub
from stubglobals.registry import DEFAULT_RECURSION_LIMIT, SlotRegistry, get_registry

if TYPE_CHECKING:
    from stubglobals.config import ConfigStore
    from stubglobals.types import LanguageLike, RequestContextLike

logger = logging.getLogger(__name__)

RECURSION_LIMIT_KEY = "unstub.recursion_limit"


def create_registry(config: ConfigStore) -> SlotRegistry:
    """Create a registry whose unstub recursion limit comes from `unstub.recursion_limit`."""
    return SlotRegistry(recursion_limit=int(config.get(RECURSION_LIMIT_KEY, DEFAULT_RECURSION_LIMIT)))


def install_language_stubs(
    config: ConfigStore,
    registry: SlotRegistry | None = None,
    *,
    language_factory: Callable[[str], LanguageLike] = Language.factory,
    context_supplier: Callable[[], RequestContextLike] = RequestContext.get_main,
    replace: bool = False,
) -> tuple[ContentLanguageStub, UserLanguageStub]:
    """Install the content and user language stubs. Neither language is built until first used.

    !!! note
        For long-lived processes this should be executed once at startup.
    """
    registry = get_registry() if registry is None else registry

    content_language = ContentLanguageStub(config, language_factory, registry=registry)
    user_language = UserLanguageStub(context_supplier, registry=registry)

    registry.install(content_language, replace=replace)
    registry.install(user_language, replace=replace)
    logger.debug("Installed language stubs in slots %s", [content_language.slot_name, user_language.slot_name])

    return content_language, user_language
