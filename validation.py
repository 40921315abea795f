"""Input checks shared by every flow before any key is computed."""
from typing import List, Optional

from messages import MISSING_FIELDS, NOT_PRIME, NOT_PRIMITIVE_ROOT, NOT_POSITIVE
from number_theory import is_prime, is_primitive_root


class ValidationError(ValueError):
    """Rejected user input, with the message to show and optional residue trace."""

    def __init__(self, message: str, steps: Optional[List[int]] = None):
        super().__init__(message)
        self.message = message
        self.steps = steps


def require_fields(*values):
    if any(value is None for value in values):
        raise ValidationError(MISSING_FIELDS)


def require_positive(*values):
    if any(value <= 0 for value in values):
        raise ValidationError(NOT_POSITIVE)


def validate_parameters(n: Optional[int], g: Optional[int], *private_keys: Optional[int]):
    """
    Run the checks in order: presence, primality, primitive root, positivity.
    The first failing check raises ValidationError.
    """
    require_fields(n, g, *private_keys)
    if not is_prime(n) or not is_prime(g):
        raise ValidationError(NOT_PRIME)
    is_root, steps = is_primitive_root(g, n)
    if not is_root:
        raise ValidationError(NOT_PRIMITIVE_ROOT, steps)
    require_positive(n, g, *private_keys)
