"""Cart domain constants.

Cart lifecycle: ``active`` is the only state that accepts line changes;
``checked_out`` and ``abandoned`` are terminal.
"""

from django.db import models


class CartStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    CHECKED_OUT = "checked_out", "Checked out"
    ABANDONED = "abandoned", "Abandoned"


VALID_TRANSITIONS: dict[str, set[str]] = {
    CartStatus.ACTIVE: {CartStatus.CHECKED_OUT, CartStatus.ABANDONED},
    CartStatus.CHECKED_OUT: set(),
    CartStatus.ABANDONED: set(),
}

TERMINAL_STATES: set[str] = {CartStatus.CHECKED_OUT, CartStatus.ABANDONED}

STOCK_GUARD_LIVE = "live"
STOCK_GUARD_RESERVED = "reserved"
