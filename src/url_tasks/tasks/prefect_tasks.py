"""Prefect tasks that use the core fetch/hash operations.

Each task is a thin adapter: it calls the core function and logs what
happened through the run logger. Tasks are not retried; a failure is
reported once and propagates to the flow.
"""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

from prefect import get_run_logger, task

from url_tasks.core.config import FetchSettings
from url_tasks.core.fetching import fetch_urls, fetch_urls_bounded
from url_tasks.core.hashing import hash_resource, hash_resources


@task(name="fetch_urls", retries=0)
def fetch_urls_task(urls: List[str], settings: Optional[FetchSettings] = None) -> List[str]:
    logger = get_run_logger()
    logger.info("Fetching %d URLs sequentially", len(urls))
    bodies = fetch_urls(urls, settings=settings)
    logger.info("Fetched %d bodies (%d chars)", len(bodies), sum(map(len, bodies)))
    return bodies


@task(name="fetch_urls_bounded", retries=0)
def fetch_urls_bounded_task(
    urls: List[str],
    max_concurrent: Optional[int] = None,
    settings: Optional[FetchSettings] = None,
) -> List[str]:
    """Bounded fetch; without `max_concurrent` the bound comes from `settings`."""
    logger = get_run_logger()
    settings = settings or FetchSettings()
    if max_concurrent is None:
        max_concurrent = settings.max_concurrent
    logger.info("Fetching %d URLs, max_concurrent=%d", len(urls), max_concurrent)
    bodies = fetch_urls_bounded(urls, max_concurrent, settings=settings)
    logger.info("Fetched %d bodies (%d chars)", len(bodies), sum(map(len, bodies)))
    return bodies


@task(name="hash_resource", retries=0)
async def hash_resource_task(
    resource: str, settings: Optional[FetchSettings] = None
) -> str:
    """Hash a single resource.

    Meant for async flows, which can await several of these side by side.
    Synchronous flows should use `hash_resources_task` instead.
    """
    logger = get_run_logger()
    digest = await hash_resource(resource, settings)
    logger.info("md5(%s) = %s", resource, digest)
    return digest


@task(name="hash_resources", retries=0)
def hash_resources_task(
    resources: List[str], settings: Optional[FetchSettings] = None
) -> Dict[str, str]:
    """Hash all resources concurrently and map each URI to its digest.

    Runs its own event loop, so it can be called from synchronous flows.
    """
    logger = get_run_logger()
    logger.info("Hashing %d resources", len(resources))
    digests = asyncio.run(hash_resources(resources, settings))
    for resource, digest in zip(resources, digests):
        logger.info("md5(%s) = %s", resource, digest)
    return dict(zip(resources, digests))
