"""
randomuser.me infinite feed example

Simulates a list view scrolling through generated people: every time the last
row becomes visible, the next page is fetched. Stops when the API has nothing
more to give or after a fixed number of pages.
"""

import asyncio
import logging
from collections.abc import Sequence

from pagewise import FetchError, LoadStatus, bind_adapter
from pagewise.sources.randomuser import Person, randomuser_paginator

MAX_PAGES = 4


class ConsoleAdapter:
    """Prints what a list view would render."""

    def __init__(self) -> None:
        self.shown = 0

    def render(self, records: Sequence[Person]) -> None:
        for person in records[self.shown :]:
            print(f"  {person.name.full_name:<35} {person.location.city}, {person.nat}")
        self.shown = len(records)

    def set_loading(self, is_loading: bool) -> None:
        if is_loading:
            print("  ... loading")

    def show_error(self, error: FetchError) -> None:
        print(f"  !! {type(error).__name__}: {error}")


async def main() -> None:
    paginator = randomuser_paginator(page_size=5, seed="pagewise")
    bind_adapter(paginator, ConsoleAdapter())

    # Initial render: nothing visible yet
    status = await paginator.load_more_if_needed(None)

    while status is not LoadStatus.EXHAUSTED and paginator.next_page <= MAX_PAGES:
        # The user scrolls to the bottom: the last row becomes visible
        last = paginator.accumulated[-1] if paginator.accumulated else None
        status = await paginator.load_more_if_needed(last.id if last else None)
        if status is LoadStatus.FAILED:
            break

    print(f"\nLoaded {len(paginator.accumulated)} people, next page {paginator.next_page}")
    paginator.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
