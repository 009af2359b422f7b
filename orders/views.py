"""
API заказов: оформление (гости и пользователи) и список заказов.
"""
import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import OrderCreateSerializer, OrderSerializer, StaffOrderSerializer
from .services import create_order, recent_orders

logger = logging.getLogger(__name__)


class OrderListCreateView(APIView):
    """
    POST /api/orders/ - оформить заказ (любой посетитель)
    GET  /api/orders/ - последние заказы: staff видит все, остальные свои
    """

    def get_permissions(self):
        if self.request.method == 'POST':
            return [AllowAny()]
        return [IsAuthenticated()]

    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            order = create_order(serializer.validated_data, user=request.user)
        except DatabaseError as exc:
            logger.error("Order create error: %s", exc, exc_info=True)
            return Response({'error': 'Failed to create order'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({'id': order.pk, 'total': order.total}, status=status.HTTP_201_CREATED)

    def get(self, request):
        orders = recent_orders(request.user)
        serializer_class = StaffOrderSerializer if request.user.is_staff else OrderSerializer
        return Response({'orders': serializer_class(orders, many=True).data})
