"""Canned menu and franchise listings served by the mock backend."""

from __future__ import annotations

import copy
from typing import Any

MENU: list[dict[str, Any]] = [
    {
        "id": 1,
        "title": "Veggie",
        "image": "pizza1.png",
        "price": 0.0038,
        "description": "A garden of delight",
    },
    {
        "id": 2,
        "title": "Pepperoni",
        "image": "pizza2.png",
        "price": 0.0042,
        "description": "Spicy treat",
    },
]

FRANCHISES: list[dict[str, Any]] = [
    {
        "id": 2,
        "name": "LotaPizza",
        "stores": [
            {"id": 4, "name": "Lehi"},
            {"id": 5, "name": "Springville"},
            {"id": 6, "name": "American Fork"},
        ],
    },
    {"id": 3, "name": "PizzaCorp", "stores": [{"id": 7, "name": "Spanish Fork"}]},
    {"id": 4, "name": "topSpot", "stores": []},
]


def menu() -> list[dict[str, Any]]:
    """Return a private copy of the standard menu."""
    return copy.deepcopy(MENU)


def franchises(admin: dict[str, Any] | None) -> list[dict[str, Any]]:
    """
    Return the standard franchise listing administered by ``admin``.

    The listing is fixed; franchises and stores created during a test are
    never reflected here.
    """
    listing = copy.deepcopy(FRANCHISES)
    if admin is not None:
        admin_ref = {"id": admin["id"], "name": admin["name"], "email": admin["email"]}
        for franchise in listing:
            franchise["admins"] = [dict(admin_ref)]
    return listing
