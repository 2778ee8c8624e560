"""
Exceptions raised by the thin category core.

Invalid candidate mappings are not errors: the validator returns False and
``create_functor`` returns None for them.
"""


class ThinCategoryError(Exception):
    """Base class for all thin category errors."""


class ValidationError(ThinCategoryError, ValueError):
    """Malformed construction input. No category is built."""


class ContractViolation(ThinCategoryError, ValueError):
    """The caller broke a precondition (incomplete mapping, mismatched functors)."""


class UnknownObjectError(ThinCategoryError, KeyError):
    """An arrow was queried from an object outside the category."""

    def __str__(self):
        # KeyError repr-quotes its message otherwise
        return str(self.args[0]) if self.args else ""
