from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    # JSON API
    path('api/', include('storefront.api_urls')),
    path('api/', include('orders.urls')),
    path('api/', include('accounts.urls')),
]
