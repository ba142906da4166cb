"""Order domain constants.

Defines the status choices (wire values are Portuguese) and the
transitions the lifecycle engine acts upon, with their stock effect.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "PENDENTE", "Pendente"
    COMPLETED = "CONCLUIDO", "Concluído"
    CANCELLED = "CANCELADO", "Cancelado"


class StockEffect(models.TextChoices):
    DEDUCT = "deduct", "Deduct stock"
    RESTORE = "restore", "Restore stock"
    NONE = "none", "No stock change"


TRANSITION_EFFECTS: dict[tuple[str, str], str] = {
    (OrderStatus.PENDING, OrderStatus.COMPLETED): StockEffect.DEDUCT,
    (OrderStatus.COMPLETED, OrderStatus.CANCELLED): StockEffect.RESTORE,
    (OrderStatus.PENDING, OrderStatus.CANCELLED): StockEffect.NONE,
}

ORDER_DELETION_MESSAGE = "Order deletion is not allowed. Use cancel status instead."
