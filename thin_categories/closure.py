"""
Reflexive-Transitive Closure

Derives the preorder generated by a list of ordered pairs. Objects are
interned to integer indices and the relation is saturated as a boolean
reachability matrix.
"""

import logging
from typing import Any, Dict, FrozenSet, Hashable, Iterable, Sequence, Tuple

import numpy as np

from .errors import ValidationError

logger = logging.getLogger(__name__)


def intern_objects(objects: Iterable[Hashable]) -> Tuple[Tuple[Hashable, ...], Dict[Hashable, int]]:
    """
    Fix the declared object order and assign each object an index.

    Raises:
        ValidationError: if an object is declared twice or is unhashable
    """
    ordered = tuple(objects)
    index: Dict[Hashable, int] = {}
    for obj in ordered:
        try:
            seen = obj in index
        except TypeError:
            raise ValidationError(f"Object {obj!r} is not hashable") from None
        if seen:
            raise ValidationError(f"Object {obj!r} declared more than once")
        index[obj] = len(index)
    return ordered, index


def closure_matrix(size: int, edges: Iterable[Tuple[int, int]]) -> np.ndarray:
    """
    Saturate index-space edges into a reflexive-transitive reachability matrix.

    Each pass ORs in everything reachable from what is already reachable,
    until a pass adds nothing.
    """
    reach = np.eye(size, dtype=bool)
    for i, j in edges:
        reach[i, j] = True

    passes = 0
    while True:
        passes += 1
        as_int = reach.astype(np.int64)
        saturated = reach | ((as_int @ as_int) > 0)
        if np.array_equal(saturated, reach):
            break
        reach = saturated

    logger.debug("closure of %d objects saturated after %d passes", size, passes)
    return reach


def is_reflexive(reach: np.ndarray) -> bool:
    return bool(np.all(np.diagonal(reach)))


def is_transitive(reach: np.ndarray) -> bool:
    """True if every two-step path already has a direct arrow."""
    as_int = reach.astype(np.int64)
    two_step = (as_int @ as_int) > 0
    return not bool(np.any(two_step & ~reach))


def relation_from_matrix(objects: Sequence[Hashable], reach: np.ndarray) -> Dict[Hashable, FrozenSet[Hashable]]:
    """Read a reachability matrix back as object -> frozenset of reachable objects."""
    return {
        obj: frozenset(objects[j] for j in np.flatnonzero(reach[i]))
        for i, obj in enumerate(objects)
    }


def _edge(pair: Any, index: Dict[Hashable, int]) -> Tuple[int, int]:
    try:
        source, target = pair
    except (TypeError, ValueError):
        raise ValidationError(f"Generating pair {pair!r} is not an ordered pair") from None
    for endpoint in (source, target):
        if endpoint not in index:
            raise ValidationError(f"Invalid object in generating pairs: {endpoint!r}")
    return index[source], index[target]


def compute_closure(objects: Iterable[Hashable],
                    generating_pairs: Iterable[Tuple[Hashable, Hashable]]) -> Dict[Hashable, FrozenSet[Hashable]]:
    """
    Compute the reflexive-transitive closure of a generating relation.

    Args:
        objects: The declared objects
        generating_pairs: Ordered pairs (a, b) meaning "there is an arrow a -> b"

    Returns:
        Mapping from each object to the set of objects reachable from it,
        itself included

    Raises:
        ValidationError: if a pair references an undeclared object
    """
    ordered, index = intern_objects(objects)
    edges = [_edge(pair, index) for pair in generating_pairs]
    return relation_from_matrix(ordered, closure_matrix(len(ordered), edges))
