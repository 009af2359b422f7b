from decimal import Decimal

from rest_framework import serializers

from .models import Order


class OrderItemSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'))
    quantity = serializers.IntegerField(min_value=1)
    image = serializers.CharField(required=False, allow_blank=True)


class OrderCreateSerializer(serializers.Serializer):
    """Checkout form payload (camelCase as sent by the cart page)."""
    customerName = serializers.CharField(source='customer_name', min_length=2, max_length=200)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(min_length=5, max_length=32)
    address = serializers.CharField(min_length=5)
    comment = serializers.CharField(required=False, allow_blank=True)
    items = OrderItemSerializer(many=True, allow_empty=False)


class OrderSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Order
        fields = [
            'id', 'user_id', 'customer_name', 'email', 'phone', 'address',
            'comment', 'total', 'items', 'created_at',
        ]
        read_only_fields = fields


class StaffOrderSerializer(OrderSerializer):
    """Order with the buyer's account data for the back office."""
    user_email = serializers.SerializerMethodField()
    user_name = serializers.SerializerMethodField()

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ['user_email', 'user_name']
        read_only_fields = fields

    def get_user_email(self, obj):
        return obj.user.email if obj.user_id else None

    def get_user_name(self, obj):
        if not obj.user_id:
            return None
        profile = getattr(obj.user, 'profile', None)
        return profile.name if profile is not None and profile.name else None
