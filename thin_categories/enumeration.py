"""
Functor Enumeration

Backtracking search for every functor between two thin categories.

Source objects are assigned in declared order and candidate images are
tried in the target's declared order. Each search node owns its partial
assignment (a tuple of target indices, one per assigned source object), so
nothing mutable is shared between branches or between calls. After each
choice only the arrows between the new object and the objects already
assigned are checked; branches that break one are dropped at once.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from . import constants
from .categorical import Functor, ThinCategory, create_functor, exists_transformation
from .errors import ContractViolation

logger = logging.getLogger(__name__)

Assignment = Tuple[int, ...]


@dataclass
class SearchStats:
    """Counters for one enumeration run."""
    visited: int = 0
    pruned: int = 0
    rejected: int = 0
    emitted: int = 0


class _Search:
    """Arrow tables for one (source, target) pair, indexed by source position."""

    def __init__(self, source: ThinCategory, target: ThinCategory):
        self.source = source
        self.target = target
        self.stats = SearchStats()

        source_reach = source.reachability
        self._target_reach = target.reachability
        self._loops = np.diagonal(source_reach)
        # earlier objects with an arrow into / out of each position
        self._into = [np.flatnonzero(source_reach[:i, i]) for i in range(len(source))]
        self._out_of = [np.flatnonzero(source_reach[i, :i]) for i in range(len(source))]

    def consistent(self, assignment: Assignment, current: int, image: int) -> bool:
        """Check the arrows between ``current`` and the already assigned objects."""
        reach = self._target_reach
        if self._loops[current] and not reach[image, image]:
            return False
        for k in self._into[current]:
            if not reach[assignment[k], image]:
                return False
        for k in self._out_of[current]:
            if not reach[image, assignment[k]]:
                return False
        return True

    def complete(self, assignment: Assignment) -> Optional[Functor]:
        mapping = {
            obj: self.target.objects[image]
            for obj, image in zip(self.source.objects, assignment)
        }
        return create_functor(self.source, self.target, mapping)


def iter_functors(source: ThinCategory, target: ThinCategory) -> Iterator[Functor]:
    """
    Lazily enumerate every functor from ``source`` to ``target``.

    The order is fixed by the declared object orders of both categories, so
    identical inputs always give the identical sequence. No functor is
    produced twice.
    """
    search = _Search(source, target)
    candidates = range(len(target))
    # worklist of (assignment, remaining source positions)
    stack: List[Tuple[Assignment, Tuple[int, ...]]] = [((), tuple(range(len(source))))]

    try:
        while stack:
            assignment, remaining = stack.pop()
            search.stats.visited += 1

            if not remaining:
                functor = search.complete(assignment)
                if functor is None:
                    search.stats.rejected += 1
                    continue
                search.stats.emitted += 1
                yield functor
                continue

            current, rest = remaining[0], remaining[1:]
            children = []
            for image in candidates:
                if search.consistent(assignment, current, image):
                    children.append((assignment + (image,), rest))
                else:
                    search.stats.pruned += 1
            # reversed so the first candidate is explored first
            stack.extend(reversed(children))
    finally:
        stats = search.stats
        logger.debug(
            "functor search %s -> %s: visited=%d pruned=%d rejected=%d emitted=%d",
            source.name, target.name, stats.visited, stats.pruned, stats.rejected, stats.emitted,
        )


def find_all_functors(source: ThinCategory, target: ThinCategory) -> List[Functor]:
    """
    Find all functors from ``source`` to ``target``.

    Recomputed from scratch on every call.
    """
    return list(iter_functors(source, target))


def functor_category(source: ThinCategory, target: ThinCategory,
                     functors: Optional[Iterable[Functor]] = None,
                     name: Optional[str] = None) -> ThinCategory:
    """
    Build the thin category of functors source -> target.

    Objects are the functors (all of them unless ``functors`` is given) and
    there is an arrow F -> G iff a natural transformation F => G exists.
    """
    if functors is None:
        functors = find_all_functors(source, target)
    functors = list(functors)
    for F in functors:
        if F.source is not source or F.target is not target:
            raise ContractViolation(
                f"Functor {F!r} does not go from {source.name} to {target.name}"
            )

    relation = {
        F: frozenset(G for G in functors if exists_transformation(F, G))
        for F in functors
    }
    if name is None:
        name = f"{constants.FUNCTOR_CATEGORY_NAME}({source.name}, {target.name})"
    return ThinCategory(functors, relation, name=name)
