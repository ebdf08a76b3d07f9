"""Shared BDD fixtures for the storefront."""

import pytest


@pytest.fixture()
def error():
    """Container for captured business-rule rejections."""
    return {"exc": None}


@pytest.fixture()
def catalogue():
    """Product name to product id."""
    return {}
