"""Order domain constants.

Orders are immutable once placed, so there is no status state machine;
``source`` records which operation produced the order.
"""

from django.db import models


class OrderSource(models.TextChoices):
    CART = "cart", "Cart checkout"
    DIRECT = "direct", "Direct purchase"


ORDER_NUMBER_MAX_RETRIES = 5
