"""
polling_status.py — Poll a slow async status endpoint until it settles.

Demonstrates polling, the loading delay and cancellation on one controller.

Usage:
    python examples/polling_status.py
"""

import asyncio
import logging
import random

from reqctl import RequestOptions, use_request


async def fetch_job_status(params: dict) -> dict:
    await asyncio.sleep(random.uniform(0.05, 0.4))
    return {"job": params["job_id"], "progress": random.randint(0, 100)}


async def main() -> None:
    logging.basicConfig(level=logging.DEBUG)

    binding = use_request(
        fetch_job_status,
        RequestOptions(
            initial_data={"job_id": "build-42"},
            polling_interval_ms=500,
            loading_delay_ms=150,
        ),
    )
    controller = binding.controller
    controller.subscribe(
        lambda state: print(f"loading={state.loading} data={state.data} error={state.error}")
    )

    await asyncio.sleep(2.2)
    controller.cancel()
    await controller.aclose()


if __name__ == "__main__":
    asyncio.run(main())
