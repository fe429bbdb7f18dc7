"""Simulated network delay for the HTTP surface, per operation class."""

import asyncio

from core.settings import Settings


async def simulate(settings: Settings, operation_class: str) -> None:
    """Sleep for the configured delay of ``operation_class`` when latency simulation is on."""
    if not settings.simulate_latency:
        return
    await asyncio.sleep(settings.latency_seconds(operation_class))
