"""
URLs для accounts приложения
"""
from django.urls import path

from . import views

urlpatterns = [
    path('auth/register/', views.register, name='api-register'),
    path('auth/login/', views.login_view, name='api-login'),
    path('auth/logout/', views.logout_view, name='api-logout'),
    path('auth/session/', views.session, name='api-session'),
    path('auth/forgot/', views.forgot_password, name='api-forgot-password'),
    path('auth/reset/', views.reset_password_view, name='api-reset-password'),
    path('account/update/', views.account_update, name='api-account-update'),
    path('users/', views.users, name='api-users'),
]
