"""Who may perform admin-only actions."""

from storefront.errors import NotAuthorized


def is_admin(caller) -> bool:
    """The stored role is the only source of truth; header claims are not consulted."""
    return caller is not None and bool(caller.is_active) and caller.is_admin


def require_admin(caller):
    if not is_admin(caller):
        raise NotAuthorized()
    return caller
