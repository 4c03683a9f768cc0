"""Typed option sources.

An option source answers "what value does this flag have, and was it set?"
for the flag names the builders understand. Every getter returns a
``(value, present)`` pair so callers can tell an unset flag from one set to
its zero value. A value of the wrong type reads as absent.

Classes:
    OptionKind: Value types an option can carry
    OptionSource: Abstract base class for option sources
    MappingOptionSource: Option source backed by a plain mapping

Example:
    Build a request from programmatic values::

        from curlargs import MappingOptionSource, build_request

        options = MappingOptionSource({
            "request": "POST",
            "url": "https://httpbin.org/post",
            "json": '{"name": "curlargs"}',
        })
        request = build_request(options)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any


class OptionKind(Enum):
    """Value types an option can carry."""

    STRING = "string"
    BOOL = "bool"
    FLOAT = "float"
    INT = "int"
    STRING_LIST = "string_list"
    STRING_MAP = "string_map"


class OptionSource(ABC):
    """Abstract base class for option sources.

    Subclasses implement :meth:`lookup`; the typed getters take care of
    type checking and zero values.
    """

    @abstractmethod
    def lookup(self, name: str) -> tuple[Any, bool]:
        """Return the raw value for ``name`` and whether it was set.

        Args:
            name: Flag name without leading dashes (e.g. "user-agent")

        Returns:
            Tuple of (raw value, present)
        """
        pass

    def get_string(self, name: str) -> tuple[str, bool]:
        value, present = self.lookup(name)
        if not present or not isinstance(value, str):
            return "", False
        return value, True

    def get_bool(self, name: str) -> tuple[bool, bool]:
        value, present = self.lookup(name)
        if not present or not isinstance(value, bool):
            return False, False
        return value, True

    def get_float(self, name: str) -> tuple[float, bool]:
        value, present = self.lookup(name)
        # bool is an int subclass but never a valid number of seconds
        if not present or isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0.0, False
        return float(value), True

    def get_int(self, name: str) -> tuple[int, bool]:
        value, present = self.lookup(name)
        if not present or isinstance(value, bool) or not isinstance(value, int):
            return 0, False
        return value, True

    def get_string_list(self, name: str) -> tuple[list[str], bool]:
        value, present = self.lookup(name)
        if (
            not present
            or isinstance(value, (str, bytes))
            or not isinstance(value, Sequence)
            or not all(isinstance(item, str) for item in value)
        ):
            return [], False
        return list(value), True

    def get_string_map(self, name: str) -> tuple[dict[str, str], bool]:
        value, present = self.lookup(name)
        if not present or not isinstance(value, Mapping):
            return {}, False
        if not all(isinstance(k, str) and isinstance(v, str) for k, v in value.items()):
            return {}, False
        return dict(value), True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class MappingOptionSource(OptionSource):
    """Option source backed by a mapping of flag name to value.

    A key that is present counts as set, whatever its value; ``None`` counts
    as unset.

    Example:
        >>> options = MappingOptionSource({"get": True, "url": "http://x.com"})
        >>> options.get_bool("get")
        (True, True)
        >>> options.get_string("request")
        ('', False)
    """

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values = dict(values or {})

    def lookup(self, name: str) -> tuple[Any, bool]:
        value = self._values.get(name)
        return value, value is not None

    def __repr__(self) -> str:
        return f"MappingOptionSource({sorted(self._values)!r})"
