"""Fallback catalog shown when the store has no products yet.

The same list seeds an empty remote collection.
"""

from __future__ import annotations

from construapp.domain.model.product import Product
from construapp.domain.model.value_objects import Money


def fallback_products() -> list[Product]:
    """Return fresh Product instances; callers may mutate them."""
    return [
        Product(
            id="1",
            name="Cemento Portland Gris",
            price=Money.of("260.00"),
            unit="Saco 50kg",
            category="Obra Gris",
            image="cemento",
            description="Cemento de alta resistencia.",
            specs=(("Resistencia", "30 MPa"), ("Peso", "50 kg")),
        ),
        Product(
            id="2",
            name='Varilla Corrugada 3/8"',
            price=Money.of("185.50"),
            unit="Pieza 12m",
            category="Aceros",
            image="varilla",
            description="Acero de refuerzo para estructuras.",
            specs=(("Diámetro", '3/8"'), ("Largo", "12m")),
        ),
    ]
