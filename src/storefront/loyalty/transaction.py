"""Loyalty ledger entry aggregate and the bcoin arithmetic."""

from datetime import datetime
from enum import Enum
from math import floor

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront

# One bcoin is earned per this many currency units of pre-discount spend
BCOINS_EARN_DIVISOR = 100

# Monetary value booked against each redeemed bcoin
BCOIN_REDEMPTION_VALUE = 2


class TransactionType(Enum):
    EARNED = "earned"
    REDEEMED = "redeemed"


def bcoins_earned_for(original_amount: float) -> int:
    """Bcoins earned on an order whose pre-discount value is ``original_amount``."""
    if not original_amount or original_amount <= 0:
        return 0
    return int(floor(original_amount / BCOINS_EARN_DIVISOR))


@storefront.aggregate
class BcoinTransaction:
    """An immutable movement of bcoins in or out of a customer's balance.

    Entries are only ever inserted. ``bcoins`` is the unsigned magnitude;
    ``transaction_type`` gives the direction.
    """

    customer_id: Identifier(required=True)
    order_id: Identifier()
    amount_spent: Float(required=True, min_value=0.0)
    bcoins: Integer(required=True, min_value=1)
    transaction_type: String(required=True, choices=TransactionType)
    description: String(max_length=255)
    created_at: DateTime(default=datetime.now)

    @property
    def signed_delta(self) -> int:
        if self.transaction_type == TransactionType.EARNED.value:
            return self.bcoins
        return -self.bcoins

    @classmethod
    def earned(cls, customer_id, order_id, amount_spent, bcoins):
        if bcoins <= 0:
            raise ValidationError({"bcoins": ["Earned bcoins must be positive"]})
        return cls(
            customer_id=customer_id,
            order_id=order_id,
            amount_spent=amount_spent,
            bcoins=bcoins,
            transaction_type=TransactionType.EARNED.value,
            description=f"Earned from order {order_id}",
        )

    @classmethod
    def redeemed(cls, customer_id, order_id, bcoins):
        if bcoins <= 0:
            raise ValidationError({"bcoins": ["Redeemed bcoins must be positive"]})
        return cls(
            customer_id=customer_id,
            order_id=order_id,
            amount_spent=bcoins * BCOIN_REDEMPTION_VALUE,
            bcoins=bcoins,
            transaction_type=TransactionType.REDEEMED.value,
            description=f"Redeemed for order {order_id}",
        )
