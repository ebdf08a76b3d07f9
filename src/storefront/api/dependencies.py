"""Request-scoped dependencies: who is calling, and are they allowed to."""

from fastapi import Depends, Header, HTTPException

from storefront.customer.authorization import require_admin
from storefront.customer.registration import ensure_customer


async def current_caller(
    x_user_id: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
):
    """Resolve the verified identity forwarded by the gateway to a Customer, registering it on first sight."""
    if not x_user_id or not x_user_email:
        raise HTTPException(status_code=401, detail="Authentication required")

    return ensure_customer(
        external_id=x_user_id,
        email=x_user_email,
        name=x_user_name,
        role=x_user_role,
    )


async def current_admin(caller=Depends(current_caller)):
    return require_admin(caller)
