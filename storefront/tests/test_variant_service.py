"""
Tests for variant rewriting and colour ownership.
"""
from __future__ import annotations

from decimal import Decimal

from django.test import TestCase

from productcolors.models import Color, ProductVariant
from storefront.models import Product
from storefront.services.catalog import (
    VariantDescriptor,
    create_variants,
    replace_variants,
    update_product,
)

IMAGES_TEXT = "https://cdn.example.com/black-1.jpg\nhttps://cdn.example.com/black-2.jpg"


def make_product(name, slug, display_order=0):
    return Product.objects.create(name=name, slug=slug, price=Decimal("49.90"), display_order=display_order)


class VariantServiceTestCase(TestCase):
    """
    Base fixture: two products without variants.
    """

    @classmethod
    def setUpTestData(cls):
        cls.hoodie = make_product("Hoodie", "hoodie", display_order=1)
        cls.tee = make_product("Tee", "tee", display_order=0)


class ColorOwnershipTests(VariantServiceTestCase):
    def test_same_value_with_images_gets_separate_rows(self):
        create_variants(self.hoodie, [
            VariantDescriptor(size="M", color_name="Black", color_value="#000000", color_images_text=IMAGES_TEXT),
        ])
        create_variants(self.tee, [
            VariantDescriptor(size="M", color_name="Black", color_value="#000000", color_images_text=IMAGES_TEXT),
        ])

        hoodie_color = self.hoodie.variants.get().color
        tee_color = self.tee.variants.get().color
        self.assertNotEqual(hoodie_color.pk, tee_color.pk)
        self.assertEqual(tee_color.images, IMAGES_TEXT.split("\n"))

    def test_color_with_images_is_never_shared(self):
        create_variants(self.hoodie, [
            VariantDescriptor(size="M", color_name="Black", color_value="#000000"),
        ])
        hoodie_color = self.hoodie.variants.get().color

        replace_variants(self.tee, [
            VariantDescriptor(size="L", color_name="Black", color_value="#000000", color_images_text=IMAGES_TEXT),
        ])

        tee_color = self.tee.variants.get().color
        self.assertNotEqual(tee_color.pk, hoodie_color.pk)
        hoodie_color.refresh_from_db()
        self.assertEqual(hoodie_color.images, [])
        for color in Color.objects.all():
            if not color.images:
                continue
            products = set(color.variants.values_list("product_id", flat=True))
            self.assertLessEqual(len(products), 1)

    def test_second_product_forks_same_value_then_keeps_its_own(self):
        """Hoodie/Tee: a colour already used elsewhere is not borrowed."""
        create_variants(self.hoodie, [
            VariantDescriptor(size="M", color_name="Black", color_value="#000"),
        ])
        create_variants(self.tee, [
            VariantDescriptor(size="L", color_name="Black", color_value="#000"),
        ])
        hoodie_color_id = self.hoodie.variants.get().color_id
        tee_color_id = self.tee.variants.get().color_id
        self.assertNotEqual(hoodie_color_id, tee_color_id)
        self.assertEqual(Color.objects.filter(value="#000").count(), 2)

        # Повторное сохранение Tee берёт свой же цвет
        replace_variants(self.tee, [
            VariantDescriptor(size="L", color_name="Black", color_value="#000"),
        ])
        self.assertEqual(self.tee.variants.get().color_id, tee_color_id)
        self.assertEqual(Color.objects.filter(value="#000").count(), 2)

    def test_edit_does_not_rename_color_of_another_product(self):
        create_variants(self.tee, [
            VariantDescriptor(size="M", color_name="Black", color_value="#000000", color_images_text=IMAGES_TEXT),
        ])
        shared = self.tee.variants.get().color

        replace_variants(self.hoodie, [
            VariantDescriptor(size="L", color_name="Jet black", color_value="#000000"),
        ])

        hoodie_color = self.hoodie.variants.get().color
        self.assertNotEqual(hoodie_color.pk, shared.pk)
        self.assertEqual(hoodie_color.name, "Jet black")
        self.assertEqual(hoodie_color.images, [])
        shared.refresh_from_db()
        self.assertEqual(shared.name, "Black")
        self.assertEqual(shared.images, IMAGES_TEXT.split("\n"))
        self.assertEqual(self.tee.variants.get().color_id, shared.pk)

    def test_unshared_color_is_reused_and_renamed(self):
        create_variants(self.hoodie, [
            VariantDescriptor(size="M", color_name="Black", color_value="#000000"),
        ])
        color_id = self.hoodie.variants.get().color_id

        replace_variants(self.hoodie, [
            VariantDescriptor(size="M", color_name="Jet black", color_value="#000000"),
        ])

        variant = self.hoodie.variants.get()
        self.assertEqual(variant.color_id, color_id)
        self.assertEqual(variant.color.name, "Jet black")

    def test_explicit_color_id_updates_orphan_color(self):
        orphan = Color.objects.create(name="Old", value="#111111")
        create_variants(self.hoodie, [
            VariantDescriptor(
                size="M",
                color_name="Graphite",
                color_value="#222222",
                color_id=str(orphan.pk),
                color_images_text=IMAGES_TEXT,
            ),
        ])

        orphan.refresh_from_db()
        self.assertEqual(self.hoodie.variants.get().color_id, orphan.pk)
        self.assertEqual(orphan.name, "Graphite")
        self.assertEqual(orphan.value, "#222222")
        self.assertEqual(len(orphan.images), 2)

    def test_malformed_color_id_forks(self):
        create_variants(self.hoodie, [
            VariantDescriptor(size="M", color_name="Black", color_value="#000000", color_id="not-a-uuid"),
        ])
        self.assertEqual(Color.objects.count(), 1)
        self.assertEqual(self.hoodie.variants.get().color.value, "#000000")

    def test_blank_value_creates_colourless_variant(self):
        create_variants(self.hoodie, [VariantDescriptor(size="One size", stock=3)])
        variant = self.hoodie.variants.get()
        self.assertIsNone(variant.color_id)
        self.assertEqual(variant.stock, 3)
        self.assertFalse(Color.objects.exists())


class VariantRewriteTests(VariantServiceTestCase):
    def test_display_order_follows_submission(self):
        replace_variants(self.hoodie, [
            VariantDescriptor(size="XL", color_value="#fff"),
            VariantDescriptor(size="S", color_value="#fff"),
            VariantDescriptor(size="M", color_value="#000"),
        ])
        rows = list(self.hoodie.variants.order_by("display_order").values_list("size", "display_order"))
        self.assertEqual(rows, [("XL", 0), ("S", 1), ("M", 2)])

    def test_replace_removes_previous_variants(self):
        create_variants(self.hoodie, [
            VariantDescriptor(size="S", color_value="#fff"),
            VariantDescriptor(size="M", color_value="#fff"),
        ])
        replace_variants(self.hoodie, [VariantDescriptor(size="L", color_value="#fff")])
        self.assertEqual(list(self.hoodie.variants.values_list("size", flat=True)), ["L"])

    def test_update_without_variants_keeps_them(self):
        create_variants(self.hoodie, [VariantDescriptor(size="M", color_value="#000", stock=5)])
        before = list(self.hoodie.variants.values_list("pk", flat=True))

        update_product(self.hoodie, {"name": "Hoodie v2"})

        self.assertEqual(list(self.hoodie.variants.values_list("pk", flat=True)), before)

    def test_update_with_empty_variants_removes_all(self):
        create_variants(self.hoodie, [VariantDescriptor(size="M", color_value="#000")])
        update_product(self.hoodie, {"variants": []})
        self.assertFalse(ProductVariant.objects.filter(product=self.hoodie).exists())
        # Цвет остаётся (осиротевший)
        self.assertEqual(Color.objects.count(), 1)
