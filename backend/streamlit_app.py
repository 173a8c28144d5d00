# streamlit_app.py
import logging

import requests
import streamlit as st

from backend.config import configure_logging
from backend.data_loader import properties_to_df
from backend.fetcher import ListingFetcher
from backend.filters import AMENITY_FLAGS, BHK_OPTIONS
from backend.format import card_html
from backend.listings import run_listings_pipeline
from backend.sorting import SORT_LABELS, SortOption
from backend.summary import showing_text
from backend.view_state import (
    ViewMode,
    ViewState,
    clear_filters,
    go_to_page,
    next_page,
    previous_page,
    set_bhk,
    set_price_range,
    set_sort,
    set_view_mode,
    toggle_amenity,
)

configure_logging()
logger = logging.getLogger(__name__)


def _credentialed_session() -> requests.Session:
    """Requests session carrying the browser's cookies to the read endpoint."""
    session = requests.Session()
    session.cookies.update(dict(st.context.cookies))
    return session


def load_listings() -> None:
    """Fetch the collection once per page view (session)."""
    if "properties_df" in st.session_state:
        return
    with st.spinner("Loading properties..."):
        task = ListingFetcher(session=_credentialed_session()).start()
        result = task.result()
    if result is None:
        return
    if not result.ok:
        logger.warning("showing empty listings: %s", result.error)
    st.session_state.fetch_error = result.error
    st.session_state.properties_df = properties_to_df(result.properties)


def _dispatch(reducer, *args) -> None:
    st.session_state.view_state = reducer(st.session_state.view_state, *args)


def _on_sort_change() -> None:
    _dispatch(set_sort, st.session_state.sort_option)


def _on_price_change() -> None:
    state, invalid = set_price_range(
        st.session_state.view_state,
        st.session_state.min_price,
        st.session_state.max_price,
    )
    st.session_state.view_state = state
    st.session_state.price_warnings = invalid


def _on_view_change() -> None:
    _dispatch(set_view_mode, st.session_state.view_mode)


def _on_clear_filters() -> None:
    _dispatch(clear_filters)
    st.session_state.min_price = ""
    st.session_state.max_price = ""
    for label in AMENITY_FLAGS:
        st.session_state[f"amenity_{label}"] = False
    st.session_state.price_warnings = []


def render_filters(state: ViewState) -> None:
    sb = st.sidebar
    sb.header("Filters")

    sb.markdown("**Price Range**")
    c1, c2 = sb.columns(2)
    c1.text_input("Min", key="min_price", placeholder="Min", on_change=_on_price_change)
    c2.text_input("Max", key="max_price", placeholder="Max", on_change=_on_price_change)
    for name in st.session_state.get("price_warnings", []):
        label = "Min" if name == "min_price" else "Max"
        sb.warning(f"{label} price is not a number and is ignored.")

    sb.markdown("**Required amenities**")
    for label in AMENITY_FLAGS:
        sb.checkbox(
            label,
            key=f"amenity_{label}",
            on_change=_dispatch,
            args=(toggle_amenity, label),
        )

    sb.markdown("**Bedrooms**")
    cols = sb.columns(len(BHK_OPTIONS))
    for col, bhk in zip(cols, BHK_OPTIONS):
        col.button(
            bhk,
            key=f"bhk_{bhk}",
            type="primary" if state.criteria.bhk == bhk else "secondary",
            on_click=_dispatch,
            args=(set_bhk, bhk),
        )

    sb.button("Clear filters", on_click=_on_clear_filters)


def render_card(card: dict) -> None:
    st.markdown(card_html(card), unsafe_allow_html=True)


def render_cards(cards, mode: ViewMode) -> None:
    if not cards:
        st.info("No matching properties found.")
        return
    if mode is ViewMode.LIST:
        for card in cards:
            render_card(card)
        return
    for i in range(0, len(cards), 3):
        cols = st.columns(3)
        for col, card in zip(cols, cards[i : i + 3]):
            with col:
                render_card(card)


def render_pagination(out: dict) -> None:
    pages = out["total_pages"]
    cols = st.columns(len(out["page_numbers"]) + 2)
    cols[0].button(
        "Previous",
        disabled=not out["has_previous"],
        on_click=_dispatch,
        args=(previous_page, pages),
    )
    for col, n in zip(cols[1:-1], out["page_numbers"]):
        col.button(
            str(n),
            key=f"page_{n}",
            type="primary" if n == out["page"] else "secondary",
            on_click=_dispatch,
            args=(go_to_page, n, pages),
        )
    cols[-1].button(
        "Next",
        disabled=not out["has_next"],
        on_click=_dispatch,
        args=(next_page, pages),
    )


st.set_page_config(page_title="Property Listings", layout="wide")
st.title("Property Listings")

if "view_state" not in st.session_state:
    st.session_state.view_state = ViewState()

load_listings()
state = st.session_state.view_state

top_left, top_right = st.columns([3, 1])
top_left.selectbox(
    "Sort",
    options=list(SORT_LABELS),
    format_func=lambda o: SORT_LABELS[SortOption(o)],
    key="sort_option",
    label_visibility="collapsed",
    on_change=_on_sort_change,
)
top_right.radio(
    "View",
    options=[m.value for m in ViewMode],
    key="view_mode",
    horizontal=True,
    label_visibility="collapsed",
    on_change=_on_view_change,
)

render_filters(state)

if st.session_state.get("fetch_error"):
    st.error(st.session_state.fetch_error)

out = run_listings_pipeline(
    st.session_state.get("properties_df", properties_to_df([])), state
)

st.write(showing_text(out["showing"]))
st.markdown(f"**{out['summary']}**")
render_cards(out["cards"], state.view_mode)
render_pagination(out)
