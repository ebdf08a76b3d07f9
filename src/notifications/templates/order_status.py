"""Buyer-facing copy for each delivery status."""


class OrderConfirmedTemplate:
    @staticmethod
    def render(context: dict) -> str:
        return f"Your order #{context.get('order_id', 'N/A')} has been confirmed by the store."


class OrderPreparingTemplate:
    @staticmethod
    def render(context: dict) -> str:
        return f"Your order #{context.get('order_id', 'N/A')} is being packed."


class OutForDeliveryTemplate:
    @staticmethod
    def render(context: dict) -> str:
        return f"Your order #{context.get('order_id', 'N/A')} is out for delivery and will reach you soon."


class OrderDeliveredTemplate:
    @staticmethod
    def render(context: dict) -> str:
        store = context.get("store_name", "B3 Store")
        return f"Your order #{context.get('order_id', 'N/A')} has been delivered. Thank you for shopping with {store}!"


class OrderCancelledTemplate:
    @staticmethod
    def render(context: dict) -> str:
        return (
            f"Your order #{context.get('order_id', 'N/A')} has been cancelled. "
            "Contact the store if this was unexpected."
        )


class StatusUpdateTemplate:
    """Fallback for any status without its own copy."""

    @staticmethod
    def render(context: dict) -> str:
        status = str(context.get("status", "updated")).replace("_", " ")
        return f"Your order #{context.get('order_id', 'N/A')} status is now: {status}."
