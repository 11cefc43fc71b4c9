"""Prefetch trigger: decides whether a visibility event warrants the next page."""

from collections.abc import Sequence

from .models import Identified


def should_load_more(visible_record_id: str | None, accumulated: Sequence[Identified]) -> bool:
    """
    Returns True when the visible record is the last loaded one.

    Args:
        visible_record_id: Id of the record that just became visible, or None
            when nothing is visible yet (initial render)
        accumulated: Records loaded so far, in display order

    Returns:
        True to bootstrap the first load (no visible record) or when the
        first record carrying ``visible_record_id`` sits at the last index.
        False for any other position, including an unknown id.
    """
    if visible_record_id is None:
        return True

    for index, record in enumerate(accumulated):
        if record.id == visible_record_id:
            return index == len(accumulated) - 1
    return False
