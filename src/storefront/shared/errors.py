"""Domain error taxonomy.

Plain input problems raise ``protean.exceptions.ValidationError`` and a
missing aggregate raises ``ObjectNotFoundError`` (both straight from
Protean). The three subclasses below carry the same ``{field: [messages]}``
payload but map to distinct HTTP statuses at the API edge.
"""

from protean.exceptions import ValidationError


class ConflictError(ValidationError):
    """A uniqueness rule was violated (duplicate email, second review)."""


class ForbiddenError(ValidationError):
    """The caller may not perform this action on this resource."""


class InvalidStatusError(ValidationError):
    """Unknown order status, or a transition the state machine does not allow."""
