"""
Tests for the product REST endpoints.
"""
import uuid
from decimal import Decimal

from django.contrib.auth.models import User
from django.test import TestCase
from rest_framework.test import APIClient

from productcolors.models import Color, ProductVariant
from storefront.models import Product

PRODUCTS_URL = '/api/products/'


def product_payload(**overrides):
    payload = {
        'name': 'Black Hoodie',
        'description': 'Heavy cotton',
        'price': 59.0,
        'comparePrice': 79.0,
        'category': 'hoodies',
        'images': ['https://cdn.example.com/hoodie.jpg'],
        'featured': True,
        'variants': [
            {'size': 'M', 'colorName': 'Black', 'colorValue': '#000000', 'stock': 5},
            {'size': 'L', 'colorName': 'Black', 'colorValue': '#000000', 'stock': 0},
        ],
    }
    payload.update(overrides)
    return payload


class ProductApiTestCase(TestCase):
    """
    Base fixture: staff user, regular user, API client.
    """

    @classmethod
    def setUpTestData(cls):
        cls.admin = User.objects.create_user(
            username='admin@example.com', email='admin@example.com', password='secret123', is_staff=True
        )
        cls.customer = User.objects.create_user(
            username='buyer@example.com', email='buyer@example.com', password='secret123'
        )

    def setUp(self):
        self.client = APIClient()

    def as_admin(self):
        self.client.force_authenticate(self.admin)

    def create_product(self, **overrides):
        self.as_admin()
        response = self.client.post(PRODUCTS_URL, product_payload(**overrides), format='json')
        self.assertEqual(response.status_code, 201, response.content)
        return response.json()


class ProductReadTests(ProductApiTestCase):
    @classmethod
    def setUpTestData(cls):
        super().setUpTestData()
        for index in range(5):
            Product.objects.create(
                name=f'Tee {index}', slug=f'tee-{index}', price=Decimal('10'), display_order=index
            )

    def test_list_is_paginated_in_display_order(self):
        response = self.client.get(PRODUCTS_URL, {'page': 1, 'limit': 2})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual([p['slug'] for p in data['products']], ['tee-4', 'tee-3'])
        self.assertEqual(data['pagination'], {'page': 1, 'limit': 2, 'total': 5, 'pages': 3})

    def test_list_default_limit(self):
        data = self.client.get(PRODUCTS_URL).json()
        self.assertEqual(data['pagination']['limit'], 20)
        self.assertEqual(len(data['products']), 5)

    def test_page_past_the_end_is_empty(self):
        response = self.client.get(PRODUCTS_URL, {'page': 9, 'limit': 2})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['products'], [])
        self.assertEqual(data['pagination'], {'page': 9, 'limit': 2, 'total': 5, 'pages': 3})

    def test_large_limit_is_not_capped(self):
        data = self.client.get(PRODUCTS_URL, {'limit': 500}).json()
        self.assertEqual(data['pagination']['limit'], 500)
        self.assertEqual(data['pagination']['pages'], 1)
        self.assertEqual(len(data['products']), 5)

    def test_retrieve_by_id_and_slug(self):
        product = Product.objects.get(slug='tee-2')

        by_id = self.client.get(f'{PRODUCTS_URL}{product.pk}/')
        by_slug = self.client.get(f'{PRODUCTS_URL}slug/tee-2/')

        self.assertEqual(by_id.status_code, 200)
        self.assertEqual(by_slug.json()['id'], str(product.pk))

    def test_missing_product_is_404(self):
        self.assertEqual(self.client.get(f'{PRODUCTS_URL}{uuid.uuid4()}/').status_code, 404)
        self.assertEqual(self.client.get(f'{PRODUCTS_URL}not-a-uuid/').status_code, 404)
        self.assertEqual(self.client.get(f'{PRODUCTS_URL}slug/nope/').status_code, 404)


class ProductPermissionTests(ProductApiTestCase):
    def test_anonymous_cannot_write(self):
        response = self.client.post(PRODUCTS_URL, product_payload(), format='json')
        self.assertIn(response.status_code, (401, 403))
        self.assertFalse(Product.objects.exists())

    def test_customer_cannot_write(self):
        self.client.force_authenticate(self.customer)
        response = self.client.post(PRODUCTS_URL, product_payload(), format='json')
        self.assertEqual(response.status_code, 403)

    def test_customer_cannot_reorder(self):
        product = Product.objects.create(name='Tee', slug='tee', price=Decimal('10'))
        self.client.force_authenticate(self.customer)
        response = self.client.post(
            f'{PRODUCTS_URL}reorder/', {'productId': str(product.pk), 'direction': 'up'}, format='json'
        )
        self.assertEqual(response.status_code, 403)


class ProductWriteTests(ProductApiTestCase):
    def test_create_product_with_variants(self):
        data = self.create_product()

        self.assertEqual(data['slug'], 'black-hoodie')
        self.assertEqual(data['comparePrice'], 79.0)
        product = Product.objects.get(pk=data['id'])
        self.assertEqual(product.variants.count(), 2)
        # Обе строки с одним цветом указывают на одну запись
        self.assertEqual(Color.objects.count(), 1)

    def test_validation_errors(self):
        self.as_admin()
        for payload in (
            product_payload(name='X'),
            product_payload(price=0),
            product_payload(images=['not a url']),
            product_payload(variants=[{'size': '', 'colorValue': '#000', 'stock': 1}]),
            product_payload(variants=[{'size': 'M', 'colorValue': '#000', 'stock': -1}]),
        ):
            response = self.client.post(PRODUCTS_URL, payload, format='json')
            self.assertEqual(response.status_code, 400, payload)
        self.assertFalse(Product.objects.exists())

    def test_duplicate_variant_rejected(self):
        self.as_admin()
        payload = product_payload(variants=[
            {'size': 'M', 'colorValue': '#000', 'stock': 1},
            {'size': 'M', 'colorValue': '#000', 'stock': 2},
        ])
        response = self.client.post(PRODUCTS_URL, payload, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertFalse(ProductVariant.objects.exists())

    def test_variants_endpoint(self):
        data = self.create_product(variants=[
            {
                'size': 'M',
                'colorName': 'Black',
                'colorValue': '#000000',
                'stock': 5,
                'colorImages': 'https://cdn.example.com/b1.jpg\nhttps://cdn.example.com/b2.jpg',
            },
            {'size': 'One size', 'stock': 1},
        ])

        response = self.client.get(f"{PRODUCTS_URL}{data['id']}/variants/")

        self.assertEqual(response.status_code, 200)
        variants = response.json()['variants']
        self.assertEqual([v['size'] for v in variants], ['M', 'One size'])
        self.assertEqual(variants[0]['colorName'], 'Black')
        self.assertEqual(variants[0]['colorImages'], ['https://cdn.example.com/b1.jpg', 'https://cdn.example.com/b2.jpg'])
        self.assertIsNone(variants[1]['colorId'])
        self.assertEqual(variants[1]['colorImages'], [])

    def test_patch_updates_given_fields_only(self):
        data = self.create_product()

        response = self.client.patch(f"{PRODUCTS_URL}{data['id']}/", {'price': 65.5}, format='json')

        self.assertEqual(response.status_code, 200, response.content)
        product = Product.objects.get(pk=data['id'])
        self.assertEqual(product.price, Decimal('65.50'))
        self.assertTrue(product.featured)
        self.assertEqual(product.variants.count(), 2)

    def test_patch_variants_only(self):
        data = self.create_product()

        response = self.client.patch(
            f"{PRODUCTS_URL}{data['id']}/",
            {'variants': [{'size': 'XL', 'colorValue': '#ffffff', 'stock': 1}]},
            format='json',
        )

        self.assertEqual(response.status_code, 200, response.content)
        product = Product.objects.get(pk=data['id'])
        self.assertEqual(list(product.variants.values_list('size', flat=True)), ['XL'])

    def test_patch_variant_rows_must_be_complete(self):
        data = self.create_product()
        before = list(
            ProductVariant.objects.filter(product_id=data['id'])
            .order_by('display_order')
            .values_list('size', 'stock')
        )

        for rows in (
            [{'colorValue': '#000'}],
            [{'size': 'M', 'colorValue': '#000'}],
            [{'stock': 3, 'colorValue': '#000'}],
            [{'size': '', 'stock': 3}],
        ):
            response = self.client.patch(f"{PRODUCTS_URL}{data['id']}/", {'variants': rows}, format='json')
            self.assertEqual(response.status_code, 400, rows)
            self.assertIn('variants', response.json())

        after = list(
            ProductVariant.objects.filter(product_id=data['id'])
            .order_by('display_order')
            .values_list('size', 'stock')
        )
        self.assertEqual(after, before)
        self.assertEqual(before, [('M', 5), ('L', 0)])

    def test_empty_patch_is_rejected(self):
        data = self.create_product()
        response = self.client.patch(f"{PRODUCTS_URL}{data['id']}/", {}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'No data'})

    def test_delete_keeps_colors(self):
        data = self.create_product()

        response = self.client.delete(f"{PRODUCTS_URL}{data['id']}/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'ok': True})
        self.assertFalse(Product.objects.exists())
        self.assertFalse(ProductVariant.objects.exists())
        self.assertEqual(Color.objects.count(), 1)

    def test_new_product_goes_first(self):
        first = self.create_product(name='First tee', variants=[])
        second = self.create_product(name='Second tee', variants=[])

        listing = self.client.get(PRODUCTS_URL).json()['products']

        self.assertEqual([p['id'] for p in listing], [second['id'], first['id']])


class ReorderApiTests(ProductApiTestCase):
    @classmethod
    def setUpTestData(cls):
        super().setUpTestData()
        cls.top = Product.objects.create(name='Top', slug='top', price=Decimal('10'), display_order=2)
        cls.bottom = Product.objects.create(name='Bottom', slug='bottom', price=Decimal('10'), display_order=1)

    def reorder(self, product_id, direction):
        self.as_admin()
        return self.client.post(
            f'{PRODUCTS_URL}reorder/', {'productId': str(product_id), 'direction': direction}, format='json'
        )

    def test_move_up(self):
        response = self.reorder(self.bottom.pk, 'up')

        self.assertEqual(response.json(), {'ok': True})
        slugs = [p['slug'] for p in self.client.get(PRODUCTS_URL).json()['products']]
        self.assertEqual(slugs, ['bottom', 'top'])

    def test_edge_move_is_ok(self):
        response = self.reorder(self.top.pk, 'up')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'ok': True})

    def test_unknown_product_is_404(self):
        response = self.reorder(uuid.uuid4(), 'down')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'error': 'Product not found'})

    def test_invalid_direction_is_400(self):
        self.assertEqual(self.reorder(self.top.pk, 'left').status_code, 400)
