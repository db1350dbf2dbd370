import pytest
from stubglobals.language import Language, RequestContext


@pytest.mark.parametrize(("code", "expected"), [("en", "en"), ("EN_gb", "en-gb"), (" de ", "de")])
def test_factory_normalizes_code(code: str, expected: str):
    assert Language.factory(code).code == expected


@pytest.mark.parametrize("code", ["", "e", "english!", "12"])
def test_factory_rejects_invalid_code(code: str):
    with pytest.raises(ValueError, match="Invalid language code"):
        Language.factory(code)


def test_init_steps():
    language = Language("en")
    assert language.encoding is None
    assert not language.is_content_language

    language.init_encoding()
    language.init_cont_lang()

    assert language.encoding == "UTF-8"
    assert language.is_content_language


def test_text_helpers():
    language = Language("en")

    assert language.uc_first("hello") == "Hello"
    assert language.uc_first("") == ""
    assert language.lc("ABC") == "abc"
    assert language.format_num(1234567) == "1,234,567"
    assert Language("fr").format_num(1234.5) == "1.234,5"
    assert language.get_dir() == "ltr"
    assert Language("he").get_dir() == "rtl"


def test_main_request_context_is_shared():
    main = RequestContext.get_main()

    assert RequestContext.get_main() is main
    assert main.get_language() is main.get_language()

    RequestContext.reset_main()
    assert RequestContext.get_main() is not main


def test_request_context_language_can_be_set():
    context = RequestContext()
    language = Language("de")
    context.set_language(language)

    assert context.get_language() is language
