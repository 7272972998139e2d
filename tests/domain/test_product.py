"""Unit tests for the Product aggregate and the fallback catalog."""

from construapp.domain.model.fallback_catalog import fallback_products
from construapp.domain.model.product import Product
from construapp.domain.model.value_objects import Money


class TestProduct:

    def test_numeric_id_normalized_to_string(self):
        product = Product(id=7, name="Arena", price=Money.of("10"))
        assert product.id == "7"

    def test_absent_price_displays_as_unavailable(self):
        product = Product(id="9", name="Grava", price=None)
        assert product.display_price == "N/A"

    def test_zero_price_displays_as_zero(self):
        product = Product(id="9", name="Muestra", price=Money.of("0"))
        assert product.display_price == "$0.00"

    def test_update_price(self):
        product = Product(id="1", name="Cemento", price=Money.of("260"))
        product.update_price(Money.of("249.90"))
        assert product.price == Money.of("249.90")

    def test_matches_name_and_category_case_insensitive(self):
        product = Product(id="2", name="Varilla", price=None, category="Aceros")
        assert product.matches("vari")
        assert product.matches("ACER")
        assert product.matches("  ")
        assert not product.matches("cemento")


class TestFallbackCatalog:

    def test_contents(self):
        products = fallback_products()
        assert [p.id for p in products] == ["1", "2"]
        assert products[0].price == Money.of("260.00")
        assert products[1].price == Money.of("185.50")
        assert products[0].specs[0] == ("Resistencia", "30 MPa")

    def test_returns_fresh_instances(self):
        first = fallback_products()
        first[0].update_price(Money.of("1"))
        assert fallback_products()[0].price == Money.of("260.00")
