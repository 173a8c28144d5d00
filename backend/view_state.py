"""Immutable listings view state and the reducers that produce new states.

Every user action on the listings page maps to one reducer. Reducers never
mutate their input; filter and sort changes send the view back to page 1.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from . import pagination
from .filters import FilterCriteria, criteria_from_inputs
from .sorting import SortOption


class ViewMode(str, Enum):
    GRID = "grid"
    LIST = "list"


@dataclass(frozen=True)
class ViewState:
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    sort: SortOption = SortOption.NONE
    current_page: int = 1
    view_mode: ViewMode = ViewMode.GRID

    def __post_init__(self):
        object.__setattr__(self, "sort", SortOption(self.sort))
        object.__setattr__(self, "view_mode", ViewMode(self.view_mode))
        if self.current_page < 1:
            object.__setattr__(self, "current_page", 1)


def set_sort(state: ViewState, option) -> ViewState:
    return replace(state, sort=SortOption(option), current_page=1)


def set_criteria(state: ViewState, criteria: FilterCriteria) -> ViewState:
    if criteria == state.criteria:
        return state
    return replace(state, criteria=criteria, current_page=1)


def set_price_range(state: ViewState, min_price=None, max_price=None):
    """Apply raw Min/Max inputs; returns ``(state, invalid_input_names)``."""
    criteria, invalid = criteria_from_inputs(
        min_price, max_price, state.criteria.amenities, state.criteria.bhk
    )
    return set_criteria(state, criteria), invalid


def toggle_amenity(state: ViewState, amenity: str) -> ViewState:
    return set_criteria(state, state.criteria.with_amenity_toggled(amenity))


def set_bhk(state: ViewState, bhk) -> ViewState:
    """Select a bedroom label; selecting the active label again clears it."""
    criteria = state.criteria
    if bhk is not None and criteria.bhk is not None and FilterCriteria(bhk=bhk).bhk == criteria.bhk:
        bhk = None
    return set_criteria(state, replace(criteria, bhk=bhk))


def clear_filters(state: ViewState) -> ViewState:
    return set_criteria(state, FilterCriteria())


def set_view_mode(state: ViewState, mode) -> ViewState:
    return replace(state, view_mode=ViewMode(mode))


def next_page(state: ViewState, pages: int) -> ViewState:
    return replace(state, current_page=pagination.next_page(state.current_page, pages))


def previous_page(state: ViewState, pages: int) -> ViewState:
    return replace(state, current_page=pagination.previous_page(state.current_page, pages))


def go_to_page(state: ViewState, page: int, pages: int) -> ViewState:
    return replace(state, current_page=pagination.go_to_page(page, pages))
