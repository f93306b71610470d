"""Extraction error hierarchy.

All errors raised by the domain layer inherit from :class:`YamlMenuError`
so the service layer can translate them into ``ServiceError`` codes with a
single ``except`` clause.
"""

from __future__ import annotations


class YamlMenuError(Exception):
    """Base class for all extraction errors."""

    code: str = "ERROR"


class ParseError(YamlMenuError):
    """Input is not well-formed YAML, or its root is not a mapping."""

    code = "PARSE_ERROR"


class MissingKeyError(YamlMenuError, KeyError):
    """A required key is absent from a mapping node."""

    code = "MISSING_KEY"

    def __init__(self, key: str, line: int | None = None) -> None:
        self.key = key
        self.line = line
        where = f" (mapping at line {line})" if line is not None else ""
        super().__init__(f"Missing required key '{key}'{where}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0])


class TypeMismatchError(YamlMenuError, TypeError):
    """A node is not of the kind an accessor expected."""

    code = "TYPE_MISMATCH"

    def __init__(self, expected: str, actual: str, line: int | None = None) -> None:
        self.expected = expected
        self.actual = actual
        self.line = line
        where = f" at line {line}" if line is not None else ""
        super().__init__(f"Expected a {expected} node, got a {actual} node{where}")


class SelectorOverflowError(YamlMenuError, IndexError):
    """A menu has more entries than there are selector characters."""

    code = "SELECTOR_OVERFLOW"

    def __init__(self, index: int, limit: int) -> None:
        self.index = index
        self.limit = limit
        super().__init__(f"Menu entry #{index} exceeds the {limit} available selectors")
