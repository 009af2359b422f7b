"""
Tests for product create/update services and slug derivation.
"""
from decimal import Decimal

from django.test import SimpleTestCase, TestCase

from storefront.models import Product
from storefront.services.catalog import (
    EmptyUpdateError,
    create_product,
    slugify_name,
    unique_slug,
    update_product,
)


class SlugifyNameTests(SimpleTestCase):
    def test_basic(self):
        self.assertEqual(slugify_name("Black Hoodie!"), "black-hoodie")

    def test_collapses_spaces_and_dashes(self):
        self.assertEqual(slugify_name("  Oversize   tee -- 2024 "), "oversize-tee-2024")

    def test_non_latin_name_falls_back(self):
        self.assertRegex(slugify_name("Худі"), r"^product-\d+$")


class ProductServiceTests(TestCase):
    def test_unique_slug_appends_counter(self):
        Product.objects.create(name="Tee", slug="tee", price=Decimal("10"))
        Product.objects.create(name="Tee", slug="tee-1", price=Decimal("10"))
        self.assertEqual(unique_slug("tee"), "tee-2")
        self.assertEqual(unique_slug("hoodie"), "hoodie")

    def test_create_puts_product_on_top(self):
        old = Product.objects.create(name="Old", slug="old", price=Decimal("10"), display_order=4)

        product = create_product({
            "name": "Black Hoodie",
            "price": Decimal("59.00"),
            "variants": [{"size": "M", "color_name": "Black", "color_value": "#000", "stock": 2}],
        })

        self.assertEqual(product.slug, "black-hoodie")
        self.assertEqual(product.display_order, old.display_order + 1)
        self.assertEqual(product.images, [])
        self.assertFalse(product.featured)
        self.assertEqual(product.variants.count(), 1)

    def test_create_with_taken_slug(self):
        create_product({"name": "Tee", "price": Decimal("10")})
        second = create_product({"name": "Tee", "price": Decimal("12")})
        self.assertEqual(second.slug, "tee-1")

    def test_update_only_given_fields(self):
        product = create_product({"name": "Tee", "price": Decimal("10"), "category": "tops"})

        update_product(product, {"price": Decimal("15.50")})

        product.refresh_from_db()
        self.assertEqual(product.price, Decimal("15.50"))
        self.assertEqual(product.name, "Tee")
        self.assertEqual(product.category, "tops")
        self.assertEqual(product.slug, "tee")

    def test_empty_update_rejected(self):
        product = create_product({"name": "Tee", "price": Decimal("10")})
        with self.assertRaises(EmptyUpdateError):
            update_product(product, {})
