"""
Helper functions used across the package
"""

from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar('T')


def max_by(items: Iterable[T], selector: Callable[[T], float]) -> Optional[T]:
    """
    Find the element with the greatest selected value

    The first element wins on ties. Returns None for an empty iterable.

    Raises:
        ValueError: If selector is None
    """
    if selector is None:
        raise ValueError("selector cannot be None")

    best = None
    best_value = None
    for item in items:
        value = selector(item)
        if best_value is None or value > best_value:
            best, best_value = item, value

    return best
