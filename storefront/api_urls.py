"""
Django REST Framework API URLs with Router.

Автоматически генерирует URL patterns для ViewSets.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .viewsets import ProductViewSet


router = DefaultRouter()
router.register(r'products', ProductViewSet, basename='api-product')

urlpatterns = [
    path('', include(router.urls)),
]

# GET    /api/products/                  - Список товаров (page, limit)
# POST   /api/products/                  - Создать товар (admin)
# GET    /api/products/{id}/             - Детали товара
# PATCH  /api/products/{id}/             - Обновить товар (admin)
# DELETE /api/products/{id}/             - Удалить товар (admin)
# GET    /api/products/{id}/variants/    - Варианты с цветами
# GET    /api/products/slug/{slug}/      - Товар по slug
# POST   /api/products/reorder/          - Сдвинуть товар вверх/вниз (admin)
