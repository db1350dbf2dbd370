"""Reference language service and request context used by the language stubs.

Host applications normally supply their own; these cover what the stubs need and keep them usable on their own.
"""

from __future__ import annotations

import re
from typing import ClassVar

_LANGUAGE_CODE = re.compile(r"^[a-z]{2,3}(-[a-z0-9]+)*$")
_RTL_LANGUAGES = frozenset(("ar", "fa", "he", "ur", "yi"))
_DECIMAL_COMMA_LANGUAGES = frozenset(("de", "es", "fr", "it", "nl", "pt", "ru"))


class Language:
    """Localisation helpers for one language code."""

    def __init__(self, code: str) -> None:
        self.code = code
        self.encoding: str | None = None
        self.is_content_language = False

    @classmethod
    def factory(cls, code: str) -> Language:
        """Create the language object for `code`, raising ValueError for malformed codes."""
        normalized = code.strip().lower().replace("_", "-")
        if not _LANGUAGE_CODE.match(normalized):
            msg = f"Invalid language code: {code!r}"
            raise ValueError(msg)

        return cls(normalized)

    def init_encoding(self) -> None:
        self.encoding = "UTF-8"

    def init_cont_lang(self) -> None:
        """Mark this language as the content language of the site."""
        self.is_content_language = True

    def get_code(self) -> str:
        return self.code

    def get_dir(self) -> str:
        return "rtl" if self.code.split("-")[0] in _RTL_LANGUAGES else "ltr"

    def uc_first(self, text: str) -> str:
        return text[:1].upper() + text[1:]

    def lc(self, text: str) -> str:
        return text.lower()

    def format_num(self, number: float) -> str:
        formatted = f"{number:,}"
        if self.code.split("-")[0] in _DECIMAL_COMMA_LANGUAGES:
            formatted = formatted.translate(str.maketrans(",.", ".,"))

        return formatted

    def __repr__(self) -> str:
        return f"Language({self.code!r})"


class RequestContext:
    """Per-request state. `get_main` returns the context of the request being served."""

    _main: ClassVar[RequestContext | None] = None

    def __init__(self, language_code: str = "en") -> None:
        self._language_code = language_code
        self._language: Language | None = None

    @classmethod
    def get_main(cls) -> RequestContext:
        if cls._main is None:
            cls._main = cls()

        return cls._main

    @classmethod
    def reset_main(cls) -> None:
        cls._main = None

    def get_language(self) -> Language:
        if self._language is None:
            self._language = Language.factory(self._language_code)

        return self._language

    def set_language(self, language: Language) -> None:
        self._language = language
