"""Order placement templates: a receipt for the buyer and an alert for the store owner."""


class OrderPlacedTemplate:
    """Sent to the buyer once the order has committed."""

    @staticmethod
    def render(context: dict) -> str:
        store = context.get("store_name", "B3 Store")
        order_id = context.get("order_id", "N/A")
        total_amount = context.get("total_amount", "0.00")
        body = f"{store}: your order #{order_id} is placed. Amount payable: Rs {total_amount}."
        bcoins_earned = context.get("bcoins_earned") or 0
        if bcoins_earned:
            body += f" You earned {bcoins_earned} bcoins."
        return body + " We'll text you as it moves along."


class NewOrderAlertTemplate:
    """Sent to the store owner for every new order."""

    @staticmethod
    def render(context: dict) -> str:
        order_id = context.get("order_id", "N/A")
        item_count = context.get("item_count", 0)
        total_amount = context.get("total_amount", "0.00")
        phone_number = context.get("phone_number", "N/A")
        return (
            f"New order #{order_id}: {item_count} item(s), Rs {total_amount}. "
            f"Customer phone: {phone_number}."
        )
