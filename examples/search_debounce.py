"""
search_debounce.py — Debounce a search box that fires on every keystroke.

Only the last query typed inside the debounce window reaches the backend.

Usage:
    python examples/search_debounce.py
"""

import asyncio

from reqctl import RequestOptions, use_request


async def search(query: str) -> list[str]:
    await asyncio.sleep(0.05)
    return [f"{query}-result-{i}" for i in range(3)]


async def main() -> None:
    binding = use_request(
        search,
        RequestOptions(manual=True, debounce_interval_ms=200, initial_data=""),
    )
    controller = binding.controller

    for prefix in ("r", "re", "req", "reqc", "reqctl"):
        binding.update(initial_data=prefix)
        controller.trigger()
        await asyncio.sleep(0.05)

    await asyncio.sleep(0.4)
    print(controller.data)
    await controller.aclose()


if __name__ == "__main__":
    asyncio.run(main())
