import pytest
from stubglobals import (
    ConfigStore,
    ContentLanguageStub,
    DuplicateSlotError,
    SlotRegistry,
    UserLanguageStub,
    create_registry,
    install_language_stubs,
)
from stubglobals.language import Language, RequestContext


def test_create_registry_reads_recursion_limit():
    assert create_registry(ConfigStore({"unstub": {"recursion_limit": 4}})).guard.limit == 4
    assert create_registry(ConfigStore({"unstub.recursion_limit": "3"})).guard.limit == 3


def test_create_registry_default_limit():
    assert create_registry(ConfigStore()).guard.limit == 2


def test_install_language_stubs(registry: SlotRegistry, config: ConfigStore):
    content, user = install_language_stubs(
        config,
        registry,
        context_supplier=lambda: RequestContext("de"),
    )

    assert isinstance(content, ContentLanguageStub)
    assert isinstance(user, UserLanguageStub)
    assert registry["wgContLang"] is content
    assert registry["wgLang"] is user
    assert not registry.is_constructed("wgContLang")

    assert registry["wgContLang"].get_code() == "en"
    assert registry["wgLang"].get_code() == "de"
    assert isinstance(registry["wgContLang"], Language)


def test_install_language_stubs_uses_process_wide_registry(default_registry: SlotRegistry, config: ConfigStore):
    install_language_stubs(config)

    assert default_registry.names() == ["wgContLang", "wgLang"]


def test_install_language_stubs_twice(registry: SlotRegistry, config: ConfigStore):
    install_language_stubs(config, registry)

    with pytest.raises(DuplicateSlotError):
        install_language_stubs(config, registry)

    content, _ = install_language_stubs(config, registry, replace=True)
    assert registry["wgContLang"] is content
