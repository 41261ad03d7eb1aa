"""Inclusion predicates over API well numbers."""

from typing import Iterable, Optional

from .models import WellAPI
from .production_parser import ApiPredicate


def county_predicate(counties: Iterable[int], state: Optional[int] = None) -> ApiPredicate:
    """Build a predicate keeping wells in the given counties.

    Args:
        counties: County codes to keep
        state: If given, the well's state code must match as well

    Returns:
        Callable returning True for wells to keep
    """
    wanted = frozenset(counties)

    def include(api: WellAPI) -> bool:
        if state is not None and api.state != state:
            return False
        return api.county in wanted

    return include
