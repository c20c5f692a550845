"""Prefect task wrappers around the core fetch and hash operations."""

from .prefect_tasks import (
    fetch_urls_bounded_task,
    fetch_urls_task,
    hash_resource_task,
    hash_resources_task,
)

__all__ = [
    "fetch_urls_task",
    "fetch_urls_bounded_task",
    "hash_resource_task",
    "hash_resources_task",
]
