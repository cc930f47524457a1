"""Shared fixtures for unit tests."""

import json
import sys
from pathlib import Path
from decimal import Decimal
import pytest

# Add src to path
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT / 'src'))

from pedy.models.catalog import Addition, Option, OptionGroup, Product
from pedy.models.establishment import Establishment


@pytest.fixture
def pizza():
    """Two-flavor pizza with a border addition and a flavor group."""
    return Product(
        id="pizza",
        name="Pizza Grande",
        base_price=Decimal("20"),
        additions=[
            Addition(id="borda", name="Borda recheada", price=Decimal("5")),
            Addition(id="bacon", name="Bacon", price=Decimal("3")),
        ],
        option_groups=[
            OptionGroup(
                id="sabores",
                name="Sabores",
                type="flavor",
                is_required=True,
                min_selections=1,
                max_selections=2,
                price_rule="average",
                options=[
                    Option(id="calabresa", name="Calabresa", price=Decimal("10")),
                    Option(id="portuguesa", name="Portuguesa", price=Decimal("16")),
                    Option(id="camarao", name="Camarão", price=Decimal("30"), is_available=False),
                ],
            ),
            OptionGroup(
                id="bebida",
                name="Bebida",
                type="single",
                options=[
                    Option(id="coca", name="Coca-Cola", price=Decimal("6")),
                    Option(id="guarana", name="Guaraná", price=Decimal("5")),
                ],
            ),
        ],
    )


@pytest.fixture
def establishment():
    return Establishment(
        id="est-1",
        name="Pizzaria Bella",
        plan_status="active",
        plan_type="pro_plus",
        delivery_fee=Decimal("6"),
        min_order_value=Decimal("30"),
    )


SNAPSHOT = {
    "establishment": {
        "id": "pizzaria-bella",
        "name": "Pizzaria Bella",
        "plan_status": "active",
        "plan_type": "pro_plus",
        "delivery_fee": 6,
        "min_order_value": 30,
    },
    "products": [
        {
            "id": "pizza-grande",
            "name": "Pizza Grande",
            "base_price": 20,
            "additions": [{"id": "borda", "name": "Borda recheada", "price": 5}],
            "option_groups": [
                {
                    "id": "sabores",
                    "name": "Sabores",
                    "type": "flavor",
                    "is_required": True,
                    "min_selections": 1,
                    "max_selections": 2,
                    "price_rule": "average",
                    "options": [
                        {"id": "calabresa", "name": "Calabresa", "price": 10},
                        {"id": "portuguesa", "name": "Portuguesa", "price": 16},
                        {"id": "camarao", "name": "Camarão", "price": 30, "is_available": False},
                    ],
                },
                {
                    "id": "bebida",
                    "name": "Bebida",
                    "type": "single",
                    "options": [
                        {"id": "coca", "name": "Coca-Cola", "price": 6},
                        {"id": "guarana", "name": "Guaraná", "price": 5},
                    ],
                },
            ],
        },
        {"id": "refri", "name": "Refrigerante", "base_price": 0.1},
    ],
    "delivery_zones": [{"neighborhood": "Centro", "fee": 4}],
    "coupons": [
        {"code": "DEZ", "discount_type": "percentage", "discount_value": 10, "min_order_value": 50},
        {"code": "ESGOTADO", "discount_type": "fixed", "discount_value": 10, "max_uses": 1, "current_uses": 1},
    ],
    "business_hours": [],
}

CART = {
    "items": [
        {
            "product_id": "pizza-grande",
            "quantity": 2,
            "addition_ids": ["borda"],
            "options": {"sabores": ["calabresa", "portuguesa"]},
        }
    ],
    "delivery": {"delivery_type": "delivery", "neighborhood": "Bairro Novo"},
    "coupon_code": "dez",
}


@pytest.fixture
def snapshot_path(tmp_path):
    path = tmp_path / "menu.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
    return str(path)


@pytest.fixture
def cart_path(tmp_path):
    path = tmp_path / "cart.json"
    path.write_text(json.dumps(CART), encoding="utf-8")
    return str(path)
