"""
Concurrency tests: many coroutines sharing one TreeService.
"""

import asyncio
import random

from avltree.models.sortedcontainers import BalancedSearchTree
from avltree.service import TreeService


class TestSerializedAccess:
    """Concurrent callers through the service's single lock."""

    async def test_many_concurrent_writers(self, assert_avl):
        """Test disjoint concurrent inserts all land and the tree stays valid."""
        tree = BalancedSearchTree.integers()
        service = TreeService(tree)

        async def writer(writer_id: int, count: int) -> None:
            for i in range(count):
                await service.insert(writer_id * 1000 + i)
                await asyncio.sleep(0)

        await asyncio.gather(*(writer(i, 100) for i in range(10)))

        assert (await service.stats())["nodeCount"] == 1000
        assert_avl(tree)

    async def test_mixed_workload(self, assert_avl):
        """Test interleaved inserts, deletes and queries keep every invariant."""
        tree = BalancedSearchTree.words()
        service = TreeService(tree)

        async def worker(worker_id: int) -> None:
            rng = random.Random(worker_id)
            for _ in range(200):
                word = f"w{rng.randint(0, 150):03d}"
                op = rng.choice(["insert", "delete", "suggest"])
                if op == "insert":
                    await service.insert(word)
                elif op == "delete":
                    await service.delete(word)
                else:
                    await service.suggest(word[:2])
                await asyncio.sleep(0)

        await asyncio.gather(*(worker(i) for i in range(8)))

        assert_avl(tree)
        stats = await service.stats()
        assert stats["nodeCount"] == len(tree.keys())

    async def test_concurrent_duplicates(self):
        """Test racing inserts of one key insert it exactly once."""
        service = TreeService(BalancedSearchTree.integers())

        results = await asyncio.gather(*(service.insert(7) for _ in range(20)))
        outcomes = [r["outcome"] for r in results]

        assert outcomes.count("inserted") == 1
        assert outcomes.count("duplicate") == 19
