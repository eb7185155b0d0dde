"""Shared domain error taxonomy.

Every failure raised by the storefront services derives from
``DomainError`` and carries a stable ``code`` so the API layer (and any
other caller) can tell the kinds apart without parsing messages.
Module-specific exceptions live next to their module and extend these.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for business-rule failures."""

    code = "domain_error"


class NotFound(DomainError):
    """A referenced product, customer, cart or order does not exist."""

    code = "not_found"


class InvariantViolation(DomainError):
    """A consistency rule was observed broken (e.g. two active carts).

    Unreachable under correct locking; raised instead of guessing so the
    unit of work rolls back cleanly.
    """

    code = "invariant_violation"
