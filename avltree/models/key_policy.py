"""
Key policies: how raw input becomes an ordered tree key.

A policy validates and normalizes input before the tree's recursive
algorithms ever see it, and supplies the three-way comparison they use.
"""

import re
from abc import ABC, abstractmethod
from typing import Any

from avltree.models.exceptions import InvalidKeyError, PrefixQueryUnsupportedError

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


class KeyPolicy(ABC):
    """
    Strategy for key validation, normalization and ordering.

    Implementations:
    - IntegerKeys: plain integer keys, no display value
    - WordKeys: case-folded string keys that remember their original casing
    """

    name: str = "abstract"
    supports_prefix: bool = False

    @abstractmethod
    def parse(self, raw: Any) -> tuple[Any, Any]:
        """
        Validate and normalize a raw key.

        Args:
            raw: Input as received from the caller.

        Returns:
            (key, display) where key is used for ordering and display is the
            form shown back to users (None if the key is its own display).

        Raises:
            InvalidKeyError: If the input is not acceptable.
        """
        pass

    def compare(self, a: Any, b: Any) -> int:
        """Three-way comparison of two normalized keys."""
        return (a > b) - (a < b)

    def parse_prefix(self, raw: Any) -> Any:
        raise PrefixQueryUnsupportedError(self.name)

    def matches_prefix(self, key: Any, prefix: Any) -> bool:
        raise PrefixQueryUnsupportedError(self.name)


class IntegerKeys(KeyPolicy):
    """
    Integer keys.

    Accepts ints and decimal strings such as "42" or "-7" (path and query
    parameters arrive as strings). Booleans, floats and anything else are
    rejected rather than coerced.
    """

    name = "integer"

    def parse(self, raw: Any) -> tuple[int, None]:
        if isinstance(raw, bool):
            raise InvalidKeyError(raw, "booleans are not integer keys")

        if isinstance(raw, int):
            return raw, None

        if isinstance(raw, str):
            text = raw.strip()
            if _INTEGER_PATTERN.fullmatch(text):
                return int(text), None
            raise InvalidKeyError(raw, "not a decimal integer")

        raise InvalidKeyError(raw, f"expected an integer, got {type(raw).__name__}")


class WordKeys(KeyPolicy):
    """
    Case-insensitive word keys.

    The key is the lower-cased word and the display keeps the caller's
    casing, so "Google" and "google" are the same key and the first one
    inserted decides how it is shown.
    """

    name = "word"
    supports_prefix = True

    def parse(self, raw: Any) -> tuple[str, str]:
        if not isinstance(raw, str):
            raise InvalidKeyError(raw, f"expected a string, got {type(raw).__name__}")

        word = raw.strip()
        if not word:
            raise InvalidKeyError(raw, "word cannot be empty")

        return word.lower(), word

    def parse_prefix(self, raw: Any) -> str:
        """Normalize a prefix. A blank prefix normalizes to the empty string."""
        if not isinstance(raw, str):
            raise InvalidKeyError(raw, f"expected a string prefix, got {type(raw).__name__}")
        return raw.strip().lower()

    def matches_prefix(self, key: str, prefix: str) -> bool:
        return key.startswith(prefix)
