from __future__ import annotations

import re
from re import Match
from typing import Any, Mapping

from stubglobals.errors import UnknownConfigKeyError
from stubglobals.types import ConfigurationReference, TemplatedString

_MISSING = object()


class ConfigStore:
    """Settings store consulted by stubs when building their real objects.

    Keys are looked up verbatim first, then as `.` separated paths into nested mappings or objects.
    Templated strings can interpolate other keys using the ${key} syntax.
    """

    __slots__ = ("__bag", "__cache")

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self.__bag: dict[str, Any] = {} if values is None else dict(values)
        self.__cache: dict[str, str] = {}

    def get(self, key: ConfigurationReference, default: Any = _MISSING) -> Any:
        """Get the value of a configuration key or expression.

        When `default` is given it is returned instead of raising for unknown plain keys.
        """
        if isinstance(key, TemplatedString):
            return self.__interpolate(key.value)

        try:
            return self.__get_value_from_name(key)
        except UnknownConfigKeyError:
            if default is _MISSING:
                raise

            return default

    def set(self, key: str, value: Any) -> None:
        self.__bag[key] = value
        self.__cache.clear()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False

        try:
            self.__get_value_from_name(key)
        except (UnknownConfigKeyError, ValueError):
            return False

        return True

    def __get_value_from_name(self, name: str) -> Any:
        if name in self.__bag:
            return self.__bag[name]

        parts = name.split(".")
        holder: Any = self.__bag

        for i, part in enumerate(parts):
            if part == "":
                msg = f"Provided config key format is invalid: '{name}'. Empty path segments are not allowed."
                raise ValueError(msg)

            holder = self.__lookup_part(parts, i, holder)

        return holder

    @staticmethod
    def __lookup_part(parts: list[str], index: int, holder: Any) -> Any:
        name = parts[index]
        parent_path = ".".join(parts[:index]) or None

        if isinstance(holder, Mapping):
            if name not in holder:
                raise UnknownConfigKeyError(name, parent_path=parent_path)

            return holder[name]

        if not hasattr(holder, name):
            raise UnknownConfigKeyError(name, parent_path=parent_path)

        return getattr(holder, name)

    def __interpolate(self, val: str) -> str:
        if val in self.__cache:
            return self.__cache[val]

        def replace_key(match: Match[str]) -> str:
            return str(self.__get_value_from_name(match.group(1)))

        res = re.sub(r"\${(.*?)}", replace_key, val, flags=re.DOTALL)
        self.__cache[val] = res

        return res
