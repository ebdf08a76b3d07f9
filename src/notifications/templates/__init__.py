"""Template registry: maps order statuses to SMS templates.

Each template renders a message body from event context data.
"""

from notifications.templates.order_placed import NewOrderAlertTemplate, OrderPlacedTemplate
from notifications.templates.order_status import (
    OrderCancelledTemplate,
    OrderConfirmedTemplate,
    OrderDeliveredTemplate,
    OrderPreparingTemplate,
    OutForDeliveryTemplate,
    StatusUpdateTemplate,
)

STATUS_TEMPLATES: dict[str, type] = {
    "confirmed": OrderConfirmedTemplate,
    "preparing": OrderPreparingTemplate,
    "out_for_delivery": OutForDeliveryTemplate,
    "delivered": OrderDeliveredTemplate,
    "cancelled": OrderCancelledTemplate,
}

__all__ = [
    "NewOrderAlertTemplate",
    "OrderPlacedTemplate",
    "STATUS_TEMPLATES",
    "StatusUpdateTemplate",
    "get_status_template",
]


def get_status_template(status: str):
    """Look up the template for ``status``, falling back to the generic update."""
    return STATUS_TEMPLATES.get(status, StatusUpdateTemplate)
