"""Tests for the background index refresh loop started by the lifespan."""

import asyncio

from unirecords.application.search.index_manager import IndexManager
from unirecords.core.lifespan import _refresh_indexes_periodically
from unirecords.domain.enums import EntityType


async def test_periodic_refresh_rebuilds_until_cancelled(
    index_manager: IndexManager, record_source, make_document
) -> None:
    """New records become searchable without a manual refresh; cancel stops the loop."""
    await index_manager.initialize_indexes()
    record_source.records[EntityType.DOCUMENT].append(
        make_document("doc-new", "Quantum entanglement seminar notes")
    )
    assert index_manager.search_type(EntityType.DOCUMENT, "entanglement") == []

    task = asyncio.create_task(_refresh_indexes_periodically(index_manager, 0.01))
    try:
        async with asyncio.timeout(2):
            while record_source.load_counts[EntityType.DOCUMENT] < 3:
                await asyncio.sleep(0.01)
    finally:
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

    assert task.cancelled()
    hits = index_manager.search_type(EntityType.DOCUMENT, "entanglement")
    assert [r.item.id for r in hits] == ["doc-new"]
    assert all(record_source.load_counts[t] >= 2 for t in EntityType)
