# thin_categories/constants.py
"""
Thin Categories Constants

Package-wide defaults. Every value here can be overridden per call with
the matching keyword argument.

CONSTRUCTION
- VERIFY_PRECLOSED_RELATIONS: re-check reflexivity/transitivity when a
  category is built from a relation that is claimed to be closed
- DEFAULT_CATEGORY_NAME: display name for unnamed categories

SEARCH
- FUNCTOR_CATEGORY_NAME: display name of the category of functors
"""


# =============================================================================
# CONSTRUCTION
# =============================================================================

# Pre-closed relations are trusted unless asked otherwise
VERIFY_PRECLOSED_RELATIONS = False

DEFAULT_CATEGORY_NAME = "C"


# =============================================================================
# SEARCH
# =============================================================================

FUNCTOR_CATEGORY_NAME = "Fun"
