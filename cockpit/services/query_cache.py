"""QueryCache: Redis read-through cache for cockpit reads.

Values are stored as JSON produced by pydantic TypeAdapters. Invalidation
goes through keys computed by ``cockpit.domain.invalidation``.

A load that overlaps an invalidation of its project is returned to the
caller but not stored: every invalidation bumps a per-project generation
counter, and the write is a WATCHed transaction on that counter.
"""

from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeVar

import structlog
from pydantic import TypeAdapter
from redis.asyncio import Redis
from redis.exceptions import WatchError

from cockpit.domain.invalidation import CacheKey, MutationKind, invalidation_keys

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class QueryCache:
    """Read-through cache keyed by CacheKey."""

    def __init__(self, redis: Redis, ttl_seconds: int = 60):
        self.redis = redis
        self.ttl_seconds = ttl_seconds

    async def fetch(
        self,
        key: CacheKey,
        loader: Callable[[], Awaitable[T]],
        adapter: TypeAdapter[T],
    ) -> T:
        """Return the cached value for key, loading and storing it on a miss.

        Loader errors propagate and nothing is cached.
        """
        rendered = key.render()
        raw = await self.redis.get(rendered)
        if raw is not None:
            return adapter.validate_json(raw)

        generation_key = key.generation_key()
        generation = await self.redis.get(generation_key)
        value = await loader()
        await self._store(rendered, generation_key, generation, adapter.dump_json(value))
        return value

    async def _store(self, rendered: str, generation_key: str, generation: Any, payload: bytes) -> None:
        async with self.redis.pipeline(transaction=True) as pipe:
            try:
                await pipe.watch(generation_key)
                if await pipe.get(generation_key) != generation:
                    logger.debug("query_cache_write_skipped", key=rendered, reason="invalidated_during_load")
                    return
                pipe.multi()
                pipe.set(rendered, payload, ex=self.ttl_seconds)
                await pipe.execute()
            except WatchError:
                logger.debug("query_cache_write_skipped", key=rendered, reason="invalidated_during_write")

    async def invalidate(self, keys: Iterable[CacheKey]) -> int:
        """Delete every entry covered by keys. Returns the number of entries removed."""
        keys = list(keys)
        # Bump generations first so loads already in flight do not store
        for generation_key in {key.generation_key() for key in keys}:
            await self.redis.incr(generation_key)
            await self.redis.expire(generation_key, self.ttl_seconds * 10)

        to_delete: list[str] = []
        for key in keys:
            to_delete.append(key.render())
            if key.is_project_wide:
                async for found in self.redis.scan_iter(match=key.render_pattern()):
                    to_delete.append(found)

        if not to_delete:
            return 0
        removed = await self.redis.delete(*set(to_delete))
        return int(removed)

    async def invalidate_for(
        self,
        kind: MutationKind,
        project_id: Any,
        scenario_id: Any = None,
    ) -> int:
        """Invalidate everything a mutation makes stale."""
        keys = invalidation_keys(kind, project_id, scenario_id)
        removed = await self.invalidate(keys)
        logger.info(
            "query_cache_invalidated",
            mutation=kind.value,
            project_id=str(project_id),
            scenario_id=str(scenario_id) if scenario_id is not None else None,
            keys=len(keys),
            removed=removed,
        )
        return removed
