"""Listings pipeline: filter -> sort -> paginate over the fetched collection."""

from typing import Any, Dict

import pandas as pd

from . import pagination
from .data_loader import df_to_records
from .filters import filter_properties
from .format import results_to_cards
from .sorting import sort_properties
from .summary import generate_summary_from_df
from .view_state import ViewState


def order_listings(properties_df: pd.DataFrame, state: ViewState) -> pd.DataFrame:
    """Filtered and sorted collection (all pages)."""
    return sort_properties(filter_properties(properties_df, state.criteria), state.sort)


def run_listings_pipeline(properties_df: pd.DataFrame, state: ViewState) -> Dict[str, Any]:
    """Run the full filter -> sort -> paginate -> cards pipeline for one view state.

    Pure: ``properties_df`` and ``state`` are not modified. The current page is
    clamped to the pages that exist for this result, so an out-of-range page is
    never rendered.

    Returns a dict with keys:
    - total: number of properties matching the filters
    - total_pages / page / page_numbers / has_previous / has_next
    - showing: number of properties on this page
    - summary: short human readable string over the whole filtered result
    - cards: list of card dicts for the current page
    - results: list of raw records (dicts) for the current page
    """
    ordered = order_listings(properties_df, state)
    pages = pagination.total_pages(len(ordered))
    page = pagination.clamp_page(state.current_page, pages)
    page_df = pagination.page_slice(ordered, page)

    return {
        "total": len(ordered),
        "total_pages": pages,
        "page": page,
        "page_numbers": pagination.page_numbers(pages),
        "has_previous": pagination.has_previous(page),
        "has_next": pagination.has_next(page, pages),
        "showing": len(page_df),
        "summary": generate_summary_from_df(ordered, state.criteria),
        "cards": results_to_cards(page_df, view=state.view_mode.value),
        "results": df_to_records(page_df),
    }
