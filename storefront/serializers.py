"""
Django REST Framework serializers for the storefront API.

Input serializers accept the camelCase payload of the admin product form and
hand snake_case `validated_data` to the catalog services.
"""

from decimal import Decimal

from rest_framework import serializers

from productcolors.models import ProductVariant
from .models import Product
from .services.catalog import MoveDirection


class VariantInputSerializer(serializers.Serializer):
    """
    One row of the variant editor.

    Fields:
        - size: Size label
        - colorName / colorValue: Colour name and HEX/keyword (blank = no colour)
        - stock: Units in stock
        - colorId: Existing colour picked in the form (optional)
        - colorImages: Newline-separated image URLs for this colour (optional)
    """
    size = serializers.CharField(min_length=1, max_length=50, trim_whitespace=False)
    colorName = serializers.CharField(source='color_name', required=False, allow_blank=True, default='')
    colorValue = serializers.CharField(source='color_value', required=False, allow_blank=True, default='')
    stock = serializers.IntegerField(min_value=0)
    colorId = serializers.CharField(source='color_id', required=False, allow_null=True, allow_blank=True)
    colorImages = serializers.CharField(
        source='color_images_text',
        required=False,
        allow_blank=True,
        trim_whitespace=False,
    )


class ProductWriteSerializer(serializers.Serializer):
    """
    Create (full) and update (partial=True) payload for a product.

    With partial=True only the keys sent by the client end up in
    `validated_data`, which is what `update_product` relies on.
    """
    name = serializers.CharField(min_length=2, max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    comparePrice = serializers.DecimalField(
        source='compare_price',
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.01'),
        required=False,
        allow_null=True,
    )
    category = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    images = serializers.ListField(child=serializers.URLField(), required=False, default=list)
    featured = serializers.BooleanField(required=False, default=False)
    variants = VariantInputSerializer(many=True, required=False, default=list)

    def validate_variants(self, value):
        """
        Reject the same (size, colour) twice in one submission.

        With partial=True DRF skips missing fields inside nested rows too, so
        the rows are validated again as complete variants.
        """
        if self.partial:
            rows = VariantInputSerializer(data=self.initial_data.get('variants'), many=True)
            rows.is_valid(raise_exception=True)
            value = rows.validated_data
        seen = set()
        for row in value:
            key = (row.get('size'), row.get('color_value') or '')
            if key in seen:
                raise serializers.ValidationError(
                    f"Duplicate variant: size {key[0]!r} with colour {key[1]!r}"
                )
            seen.add(key)
        return value


class ProductSerializer(serializers.ModelSerializer):
    """Product as returned by the API."""
    comparePrice = serializers.DecimalField(
        source='compare_price', max_digits=10, decimal_places=2, read_only=True, allow_null=True
    )

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'price', 'comparePrice',
            'category', 'images', 'featured', 'display_order',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class VariantSerializer(serializers.ModelSerializer):
    """Variant with its colour flattened in, as the product page expects."""
    colorId = serializers.UUIDField(source='color_id', read_only=True, allow_null=True)
    colorName = serializers.SerializerMethodField()
    colorValue = serializers.SerializerMethodField()
    colorImages = serializers.SerializerMethodField()

    class Meta:
        model = ProductVariant
        fields = ['id', 'size', 'colorId', 'colorName', 'colorValue', 'colorImages', 'stock']
        read_only_fields = fields

    def get_colorName(self, obj):
        return obj.color.name if obj.color_id else None

    def get_colorValue(self, obj):
        return obj.color.value if obj.color_id else None

    def get_colorImages(self, obj):
        if not obj.color_id:
            return []
        return list(obj.color.images or [])


class ReorderSerializer(serializers.Serializer):
    productId = serializers.CharField(source='product_id')
    direction = serializers.ChoiceField(choices=MoveDirection.choices)
