"""
API views для авторизации и личного кабинета.
"""
import logging

from django.conf import settings
from django.contrib.auth import authenticate, login, logout, update_session_auth_hash
from django.db import DatabaseError
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.response import Response

from .serializers import (
    AccountUpdateSerializer,
    ForgotPasswordSerializer,
    LoginSerializer,
    RegisterSerializer,
    ResetPasswordSerializer,
    UserListSerializer,
)
from .services import (
    EmailAlreadyRegistered,
    ExpiredResetToken,
    InvalidResetToken,
    PasswordChangeError,
    issue_reset_token,
    normalize_email,
    recent_users,
    register_user,
    reset_password,
    session_payload,
    update_account,
)

logger = logging.getLogger(__name__)

RESET_NEUTRAL_MESSAGE = "If the email exists, a reset link will be sent."


def _bad_request(exc):
    return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)


@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Регистрация: email + пароль, имя/телефон/адрес по желанию"""
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    try:
        user = register_user(**serializer.validated_data)
    except EmailAlreadyRegistered as exc:
        return _bad_request(exc)
    except DatabaseError as exc:
        logger.error("Registration error: %s", exc, exc_info=True)
        return Response({'error': 'Failed to register'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(
        {'message': 'User created successfully', 'userId': user.pk},
        status=status.HTTP_201_CREATED,
    )


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = authenticate(
        request,
        username=normalize_email(serializer.validated_data['email']),
        password=serializer.validated_data['password'],
    )
    if user is None:
        return Response({'error': 'Invalid email or password'}, status=status.HTTP_400_BAD_REQUEST)
    login(request, user)
    return Response({'user': session_payload(user)})


@api_view(['POST'])
@permission_classes([AllowAny])
def logout_view(request):
    logout(request)
    return Response({'ok': True})


@api_view(['GET'])
@permission_classes([AllowAny])
def session(request):
    """Текущий пользователь или {user: null}"""
    if not request.user.is_authenticated:
        return Response({'user': None})
    return Response({'user': session_payload(request.user)})


@api_view(['POST'])
@permission_classes([AllowAny])
def forgot_password(request):
    """
    Выдать токен сброса пароля (1 час по умолчанию).

    Ответ не раскрывает, существует ли e-mail. Токен возвращается в ответе
    только при PASSWORD_RESET_EXPOSE_TOKEN (локальная разработка).
    """
    serializer = ForgotPasswordSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    reset = issue_reset_token(serializer.validated_data['email'])
    payload = {'message': RESET_NEUTRAL_MESSAGE}
    if reset is not None and settings.PASSWORD_RESET_EXPOSE_TOKEN:
        payload['token'] = reset.token
    return Response(payload)


@api_view(['POST'])
@permission_classes([AllowAny])
def reset_password_view(request):
    serializer = ResetPasswordSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    try:
        reset_password(serializer.validated_data['token'], serializer.validated_data['password'])
    except (InvalidResetToken, ExpiredResetToken) as exc:
        return _bad_request(exc)
    return Response({'message': 'Password updated'})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def account_update(request):
    """Обновление профиля и смена пароля"""
    serializer = AccountUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    try:
        update_account(request.user, data)
    except PasswordChangeError as exc:
        return _bad_request(exc)
    if data.get('new_password'):
        # сессия остаётся рабочей после смены пароля
        update_session_auth_hash(request, request.user)
    return Response({'ok': True})


@api_view(['GET'])
@permission_classes([IsAdminUser])
def users(request):
    return Response({'users': UserListSerializer(recent_users(), many=True).data})
