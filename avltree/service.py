"""
TreeService - serialized async access to one owned tree.
"""

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from avltree.models.exceptions import InvalidKeyError
from avltree.models.outcome import Mutation, Outcome
from avltree.models.sortedcontainers import BalancedSearchTree

logger = logging.getLogger(__name__)


class TreeService:
    """
    Owns a single BalancedSearchTree and serializes every call on it.

    Provides:
    - insert(raw) / delete(raw): mutate and return {outcome, key, root, rotations}
    - suggest(prefix, limit): prefix query (word trees only)
    - tree(): current snapshot plus the rotations of the latest mutation
    - stats() / theoretical_height(): structural statistics
    - words(): every key in order, in display form
    - reset(): drop every key

    The tree mutates node links in place without any locking of its own, so
    all access goes through one asyncio.Lock. Invalid keys come back as an
    `invalid_key` outcome instead of an exception.
    """

    DEFAULT_SUGGESTION_LIMIT = 10

    # Upper bound for max_suggestions
    MAX_SUGGESTIONS_CEILING = 1000

    def __init__(
        self,
        tree: BalancedSearchTree,
        name: str = "tree",
        max_suggestions: int = 50,
    ) -> None:
        """
        Initialize the service.

        Args:
            tree: The tree this service owns from now on.
            name: Label used in log messages.
            max_suggestions: Hard cap on the number of prefix query results.
        """
        if tree is None:
            raise ValueError("tree cannot be None")

        if max_suggestions <= 0:
            raise ValueError(f"max_suggestions must be positive, got {max_suggestions}")
        if max_suggestions > self.MAX_SUGGESTIONS_CEILING:
            raise ValueError(
                f"max_suggestions cannot exceed {self.MAX_SUGGESTIONS_CEILING}, "
                f"got {max_suggestions}"
            )

        self._tree = tree
        self._name = name
        self._max_suggestions = max_suggestions
        self._lock = asyncio.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def max_suggestions(self) -> int:
        return self._max_suggestions

    async def insert(self, raw: Any) -> dict[str, Any]:
        async with self._lock:
            try:
                mutation = self._tree.insert(raw)
            except InvalidKeyError as e:
                return self._rejected(e)

            if mutation.outcome == Outcome.DUPLICATE:
                logger.debug(f"[{self._name}] duplicate key {mutation.key!r} not inserted")
            return self._mutation_payload(mutation)

    async def delete(self, raw: Any) -> dict[str, Any]:
        async with self._lock:
            try:
                mutation = self._tree.delete(raw)
            except InvalidKeyError as e:
                return self._rejected(e)

            if mutation.outcome == Outcome.NOT_FOUND:
                logger.debug(f"[{self._name}] key {mutation.key!r} not found")
            return self._mutation_payload(mutation)

    async def seed(self, values: Iterable[Any]) -> int:
        """
        Insert many keys under one lock acquisition.

        Returns:
            Number of keys actually inserted. Invalid entries are skipped with a warning.
        """
        inserted = 0
        async with self._lock:
            for raw in values:
                try:
                    if self._tree.insert(raw).changed:
                        inserted += 1
                except InvalidKeyError as e:
                    logger.warning(f"[{self._name}] skipping seed value: {e}")

        logger.info(f"[{self._name}] seeded {inserted} keys")
        return inserted

    async def suggest(self, prefix: Any, limit: int | None = None) -> dict[str, Any]:
        """
        Prefix query.

        Args:
            prefix: Prefix to match, case-insensitively.
            limit: Requested result count, clamped to max_suggestions.

        Returns:
            {"suggestions": [{"key", "display"}, ...]} plus "error" if the prefix was rejected.
        """
        if limit is None:
            limit = min(self.DEFAULT_SUGGESTION_LIMIT, self._max_suggestions)
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")
        limit = min(limit, self._max_suggestions)

        async with self._lock:
            try:
                hits = self._tree.suggest(prefix, limit)
            except InvalidKeyError as e:
                logger.warning(f"[{self._name}] rejected prefix: {e}")
                return {"suggestions": [], "error": str(e)}

        return {"suggestions": [hit.to_dict() for hit in hits]}

    async def tree(self) -> dict[str, Any]:
        async with self._lock:
            return {
                "root": self._tree.snapshot(),
                "rotations": [r.to_dict() for r in self._tree.last_rotations],
            }

    async def stats(self) -> dict[str, int]:
        async with self._lock:
            return self._tree.stats().to_dict()

    async def theoretical_height(self) -> int:
        async with self._lock:
            return self._tree.min_height()

    async def words(self) -> list[Any]:
        async with self._lock:
            return self._tree.displays()

    async def reset(self) -> None:
        async with self._lock:
            self._tree.clear()

    def _mutation_payload(self, mutation: Mutation) -> dict[str, Any]:
        return {
            "outcome": mutation.outcome.value,
            "key": mutation.key,
            "root": self._tree.snapshot(),
            "rotations": [r.to_dict() for r in mutation.rotations],
        }

    def _rejected(self, error: InvalidKeyError) -> dict[str, Any]:
        logger.warning(f"[{self._name}] rejected key: {error}")
        return {
            "outcome": Outcome.INVALID_KEY.value,
            "key": None,
            "error": str(error),
            "root": self._tree.snapshot(),
            "rotations": [],
        }
