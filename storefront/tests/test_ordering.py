"""
Tests for manual product ordering.
"""
import uuid
from decimal import Decimal

from django.test import TestCase

from storefront.models import Product
from storefront.services.catalog import (
    MoveDirection,
    move_product,
    next_display_order,
    resequence_display_order,
)


def listing():
    return list(Product.objects.order_by("-display_order", "-created_at").values_list("slug", flat=True))


class NextDisplayOrderTests(TestCase):
    def test_empty_table_starts_at_zero(self):
        self.assertEqual(next_display_order(), 0)

    def test_max_plus_one(self):
        Product.objects.create(name="A", slug="a", price=Decimal("10"), display_order=7)
        Product.objects.create(name="B", slug="b", price=Decimal("10"), display_order=3)
        self.assertEqual(next_display_order(), 8)


class MoveProductTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.first = Product.objects.create(name="First", slug="first", price=Decimal("10"), display_order=30)
        cls.second = Product.objects.create(name="Second", slug="second", price=Decimal("10"), display_order=20)
        cls.third = Product.objects.create(name="Third", slug="third", price=Decimal("10"), display_order=10)

    def test_move_up_swaps_with_neighbour(self):
        self.assertTrue(move_product(self.second.pk, MoveDirection.UP))

        self.assertEqual(listing(), ["second", "first", "third"])
        self.second.refresh_from_db()
        self.first.refresh_from_db()
        self.assertEqual((self.second.display_order, self.first.display_order), (30, 20))
        self.third.refresh_from_db()
        self.assertEqual(self.third.display_order, 10)

    def test_move_down_swaps_with_neighbour(self):
        self.assertTrue(move_product(str(self.second.pk), "down"))
        self.assertEqual(listing(), ["first", "third", "second"])

    def test_edges_are_no_ops(self):
        self.assertFalse(move_product(self.first.pk, "up"))
        self.assertFalse(move_product(self.third.pk, "down"))
        self.assertEqual(listing(), ["first", "second", "third"])

    def test_up_then_down_restores_listing(self):
        move_product(self.third.pk, "up")
        move_product(self.third.pk, "down")
        self.assertEqual(listing(), ["first", "second", "third"])

    def test_unknown_product(self):
        with self.assertRaises(Product.DoesNotExist):
            move_product(uuid.uuid4(), "up")
        with self.assertRaises(Product.DoesNotExist):
            move_product("not-a-uuid", "up")

    def test_unknown_direction(self):
        with self.assertRaises(ValueError):
            move_product(self.first.pk, "sideways")


class ResequenceTests(TestCase):
    def test_renumbers_without_ties(self):
        Product.objects.create(name="A", slug="a", price=Decimal("10"), display_order=5)
        Product.objects.create(name="B", slug="b", price=Decimal("10"), display_order=9)
        Product.objects.create(name="C", slug="c", price=Decimal("10"), display_order=1)
        before = listing()

        changed = resequence_display_order()

        self.assertEqual(changed, 3)
        self.assertEqual(listing(), before)
        orders = list(Product.objects.order_by("-display_order").values_list("display_order", flat=True))
        self.assertEqual(orders, [2, 1, 0])
        self.assertEqual(resequence_display_order(), 0)
