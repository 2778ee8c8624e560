"""
Thin Categories - Preorders, Functors and Natural Transformations

Models finite thin categories (at most one arrow per ordered pair of
objects) and computes:
- the reflexive-transitive closure of a generating relation
- every functor between two thin categories
- whether a natural transformation exists between two functors
"""

__version__ = "0.1.0"

from .errors import ThinCategoryError, ValidationError, ContractViolation, UnknownObjectError
from .closure import compute_closure
from .categorical import (
    ThinCategory,
    Functor,
    build_category,
    has_arrow,
    is_valid_functor,
    create_functor,
    exists_transformation,
)
from .enumeration import iter_functors, find_all_functors, functor_category

__all__ = [
    "ThinCategory",
    "Functor",
    "build_category",
    "compute_closure",
    "has_arrow",
    "is_valid_functor",
    "create_functor",
    "iter_functors",
    "find_all_functors",
    "functor_category",
    "exists_transformation",
    "ThinCategoryError",
    "ValidationError",
    "ContractViolation",
    "UnknownObjectError",
]
