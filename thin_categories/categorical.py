"""
Thin Category Module

Implements thin categories (preorders), functors between them and the
existence test for natural transformations.

A thin category has at most one arrow between any ordered pair of objects,
so a category is fully described by its objects and a reflexive, transitive
relation. Because the target of a functor is thin, a natural transformation
F => G exists iff every component F(X) -> G(X) exists, and it is then unique.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import (
    AbstractSet, Any, FrozenSet, Hashable, Iterable, Iterator, Mapping, Optional, Tuple, Union,
)

import numpy as np

from . import constants
from .closure import compute_closure, intern_objects, is_reflexive, is_transitive, relation_from_matrix
from .errors import ContractViolation, UnknownObjectError, ValidationError

logger = logging.getLogger(__name__)


class ThinCategory:
    """
    Finite set of objects with a preorder relation.

    The relation maps each object to the set of objects it has an arrow to.
    Every key and every element of every value must be a declared object.
    A relation passed here is trusted to be reflexive and transitive unless
    ``verify`` is set; use ``from_generators`` to derive a closed relation
    from generating pairs instead.

    Attributes:
        name: Display name of the category
        objects: Declared objects, in declaration order
        relation: Read-only mapping object -> frozenset of reachable objects
        reachability: Read-only boolean matrix, [i, j] iff objects[i] -> objects[j]
    """

    def __init__(self, objects: Iterable[Hashable],
                 relation: Mapping[Hashable, AbstractSet[Hashable]],
                 name: Optional[str] = None,
                 verify: Optional[bool] = None):
        ordered, index = intern_objects(objects)
        reach = np.zeros((len(ordered), len(ordered)), dtype=bool)

        for source, targets in relation.items():
            if source not in index:
                raise ValidationError(f"Invalid object in relations: {source!r}")
            for target in targets:
                if target not in index:
                    raise ValidationError(f"Invalid object in relations: {target!r}")
                reach[index[source], index[target]] = True

        self.name = name if name is not None else constants.DEFAULT_CATEGORY_NAME

        if verify is None:
            verify = constants.VERIFY_PRECLOSED_RELATIONS
        if verify:
            if not is_reflexive(reach):
                raise ValidationError(f"Relation of category {self.name} is not reflexive")
            if not is_transitive(reach):
                raise ValidationError(f"Relation of category {self.name} is not transitive")
            logger.debug("verified closure of category %s", self.name)

        reach.setflags(write=False)
        self._objects = ordered
        self._index = index
        self._reach = reach
        self._relation = MappingProxyType(relation_from_matrix(ordered, reach))

    @classmethod
    def from_generators(cls, objects: Iterable[Hashable],
                        generating_pairs: Iterable[Tuple[Hashable, Hashable]],
                        name: Optional[str] = None) -> "ThinCategory":
        """Build a category whose relation is the closure of ``generating_pairs``."""
        relation = compute_closure(objects, generating_pairs)
        return cls(list(relation), relation, name=name)

    @property
    def objects(self) -> Tuple[Hashable, ...]:
        return self._objects

    @property
    def relation(self) -> Mapping[Hashable, FrozenSet[Hashable]]:
        return self._relation

    @property
    def reachability(self) -> np.ndarray:
        return self._reach

    def index_of(self, obj: Hashable) -> int:
        """Position of ``obj`` in the declared order."""
        try:
            return self._index[obj]
        except KeyError:
            raise UnknownObjectError(f"Object {obj!r} not in category {self.name}") from None

    def has_arrow(self, source: Hashable, target: Hashable) -> bool:
        """
        Check whether there is an arrow source -> target.

        Raises:
            UnknownObjectError: if ``source`` is not an object of this category
        """
        i = self.index_of(source)
        if target not in self:
            return False
        return bool(self._reach[i, self._index[target]])

    def arrows(self) -> Iterator[Tuple[Hashable, Hashable]]:
        """Iterate over all arrows (a, b), identities included, in declared order."""
        for i, j in zip(*np.nonzero(self._reach)):
            yield self._objects[i], self._objects[j]

    def is_preorder(self) -> bool:
        return is_reflexive(self._reach) and is_transitive(self._reach)

    def __contains__(self, obj: Any) -> bool:
        try:
            return obj in self._index
        except TypeError:
            # unhashable values are never objects
            return False

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __repr__(self) -> str:
        return f"ThinCategory(name={self.name!r}, objects={self._objects!r})"


def build_category(objects: Iterable[Hashable],
                   relation_or_pairs: Union[Mapping[Hashable, AbstractSet[Hashable]],
                                            Iterable[Tuple[Hashable, Hashable]]],
                   name: Optional[str] = None,
                   verify: Optional[bool] = None) -> ThinCategory:
    """
    Build a thin category from either a closed relation or generating pairs.

    A mapping is taken as an already closed relation; any other iterable is
    taken as generating pairs and closed first.
    """
    if isinstance(relation_or_pairs, Mapping):
        return ThinCategory(objects, relation_or_pairs, name=name, verify=verify)
    return ThinCategory.from_generators(objects, relation_or_pairs, name=name)


def has_arrow(category: ThinCategory, source: Hashable, target: Hashable) -> bool:
    """Check for an arrow source -> target in ``category``."""
    return category.has_arrow(source, target)


@dataclass(frozen=True, eq=False)
class Functor:
    """
    Represents a functor between two thin categories.

    In a thin category a functor is determined by its object map, which must
    send every arrow a -> b of the source to an arrow F(a) -> F(b) of the
    target. Build functors with ``create_functor`` to have that checked.
    """
    source: ThinCategory
    target: ThinCategory
    mapping: Mapping[Hashable, Hashable]

    def __post_init__(self):
        object.__setattr__(self, "mapping", MappingProxyType(dict(self.mapping)))

    def __call__(self, obj: Hashable) -> Hashable:
        """Map an object from the source to the target category."""
        return self.mapping[obj]

    __getitem__ = __call__

    def images(self) -> Tuple[Hashable, ...]:
        """Images of the source objects, in the source's declared order."""
        return tuple(self.mapping[obj] for obj in self.source.objects)

    def __eq__(self, other):
        if not isinstance(other, Functor):
            return NotImplemented
        return (self.source is other.source and
                self.target is other.target and
                dict(self.mapping) == dict(other.mapping))

    def __hash__(self):
        return hash((id(self.source), id(self.target), frozenset(self.mapping.items())))

    def __repr__(self) -> str:
        pairs = ", ".join(f"{obj!r}: {self.mapping[obj]!r}" for obj in self.source.objects)
        return f"Functor({self.source.name} -> {self.target.name}, {{{pairs}}})"


def _check_mapping(source: ThinCategory, target: ThinCategory,
                   mapping: Mapping[Hashable, Hashable]) -> None:
    missing = [obj for obj in source.objects if obj not in mapping]
    if missing:
        raise ContractViolation(f"Mapping is not total, missing images for {missing!r}")
    extra = [obj for obj in mapping if obj not in source]
    if extra:
        raise ContractViolation(f"Mapping has images for {extra!r}, which are not objects of category {source.name}")
    foreign = [mapping[obj] for obj in source.objects if mapping[obj] not in target]
    if foreign:
        raise ContractViolation(f"Images {foreign!r} are not objects of category {target.name}")


def is_valid_functor(source: ThinCategory, target: ThinCategory,
                     mapping: Mapping[Hashable, Hashable]) -> bool:
    """
    Check that ``mapping`` preserves every arrow of ``source``.

    For every source object s and every r reachable from s (s included),
    the target must have an arrow mapping[s] -> mapping[r].

    Raises:
        ContractViolation: if ``mapping`` is not total over the source objects
            or sends an object outside the target
    """
    _check_mapping(source, target, mapping)

    images = [target.index_of(mapping[obj]) for obj in source.objects]
    target_reach = target.reachability
    for i, j in zip(*np.nonzero(source.reachability)):
        if not target_reach[images[i], images[j]]:
            return False
    return True


def create_functor(source: ThinCategory, target: ThinCategory,
                   mapping: Mapping[Hashable, Hashable]) -> Optional[Functor]:
    """
    Safe functor constructor.

    Returns:
        The functor, or None if ``mapping`` does not preserve arrows
    """
    if not is_valid_functor(source, target, mapping):
        return None
    return Functor(source, target, mapping)


def exists_transformation(F: Functor, G: Functor) -> bool:
    """
    Check whether a natural transformation F => G exists.

    Naturality squares commute automatically in a thin target, so this only
    needs an arrow F(X) -> G(X) for every source object X.

    Raises:
        ContractViolation: if the functors do not share source and target
    """
    if F.source is not G.source:
        raise ContractViolation("Functors must have the same source category")
    if F.target is not G.target:
        raise ContractViolation("Functors must have the same target category")

    return all(F.target.has_arrow(F(obj), G(obj)) for obj in F.source.objects)
