"""Fixed-size pagination over the ordered listings."""

import math
from typing import List

import pandas as pd

from .config import ITEMS_PER_PAGE


def total_pages(count: int, per_page: int = ITEMS_PER_PAGE) -> int:
    return math.ceil(count / per_page) if count > 0 else 0


def clamp_page(page: int, pages: int) -> int:
    """Clamp to ``[1, pages]``; 1 when there are no pages."""
    if pages <= 0:
        return 1
    return max(1, min(int(page), pages))


def page_numbers(pages: int) -> List[int]:
    return list(range(1, pages + 1))


def has_previous(page: int) -> bool:
    return page > 1


def has_next(page: int, pages: int) -> bool:
    return page < pages


def next_page(page: int, pages: int) -> int:
    return clamp_page(page + 1, pages)


def previous_page(page: int, pages: int) -> int:
    return clamp_page(page - 1, pages)


def go_to_page(page: int, pages: int) -> int:
    return clamp_page(page, pages)


def page_slice(df: pd.DataFrame, page: int, per_page: int = ITEMS_PER_PAGE) -> pd.DataFrame:
    """Rows ``[(page-1)*per_page, page*per_page)``; empty when out of range."""
    start = (page - 1) * per_page
    return df.iloc[start : start + per_page].reset_index(drop=True)
