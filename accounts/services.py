"""
Account services: registration, password reset tokens, profile updates.

Users are stock `django.contrib.auth` users whose username is the
lower-cased e-mail; the profile carries name, phone and address.
"""
import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.contrib.auth.models import User
from django.core.mail import send_mail
from django.db import transaction
from django.utils import timezone

from .models import PasswordResetToken, UserProfile

logger = logging.getLogger(__name__)

RECENT_USERS_LIMIT = 200
PROFILE_FIELDS = ('name', 'phone', 'address')


class EmailAlreadyRegistered(ValueError):
    pass


class InvalidResetToken(ValueError):
    pass


class ExpiredResetToken(ValueError):
    pass


class PasswordChangeError(ValueError):
    pass


def normalize_email(email):
    return (email or '').strip().lower()


def get_profile(user):
    profile, _ = UserProfile.objects.get_or_create(user=user)
    return profile


def display_name(user):
    """Profile name, falling back to the e-mail."""
    return get_profile(user).name or user.email


def session_payload(user):
    """Current-user shape used by the session endpoint."""
    return {
        'id': user.pk,
        'email': user.email,
        'name': display_name(user),
        'role': 'ADMIN' if user.is_staff else 'USER',
    }


@transaction.atomic
def register_user(email, password, name=None, phone=None, address=None):
    """
    Create a user with a profile.

    Raises:
        EmailAlreadyRegistered: a user with this e-mail exists.
    """
    email = normalize_email(email)
    if User.objects.filter(username=email).exists() or User.objects.filter(email__iexact=email).exists():
        raise EmailAlreadyRegistered("Email already registered")

    user = User.objects.create_user(username=email, email=email, password=password)
    profile = get_profile(user)
    profile.name = name or ''
    profile.phone = phone or ''
    profile.address = address or ''
    profile.save()
    logger.info("Registered user %s", user.pk)
    return user


def issue_reset_token(email):
    """
    Create a reset token and mail the link.

    Returns the token row, or None when no user has this e-mail; callers
    answer both cases with the same message.
    """
    user = User.objects.filter(email__iexact=normalize_email(email)).first()
    if user is None:
        logger.info("Password reset requested for unknown e-mail")
        return None

    reset = PasswordResetToken.objects.create(
        user=user,
        token=secrets.token_urlsafe(32),
        expires_at=timezone.now() + timedelta(minutes=settings.PASSWORD_RESET_TIMEOUT_MINUTES),
    )
    link = settings.PASSWORD_RESET_URL.format(token=reset.token)
    send_mail(
        subject='Password reset',
        message=(
            f'Use this link to set a new password: {link}\n'
            f'The link expires in {settings.PASSWORD_RESET_TIMEOUT_MINUTES} minutes.'
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
        fail_silently=False,
    )
    logger.info("Issued password reset token for user %s", user.pk)
    return reset


@transaction.atomic
def reset_password(token, password):
    """
    Consume an unused, unexpired token and set the new password.

    Raises:
        InvalidResetToken: unknown or already used token.
        ExpiredResetToken: token past its expiry.
    """
    reset = (
        PasswordResetToken.objects.select_for_update()
        .select_related('user')
        .filter(token=token, used=False)
        .first()
    )
    if reset is None:
        raise InvalidResetToken("Invalid or used token")
    if reset.is_expired:
        raise ExpiredResetToken("Token expired")

    user = reset.user
    user.set_password(password)
    user.save(update_fields=['password'])
    reset.used = True
    reset.save(update_fields=['used'])
    logger.info("Password reset for user %s", user.pk)
    return user


@transaction.atomic
def update_account(user, data):
    """
    Patch profile fields present in `data` and optionally change the password.

    `data` keys: name, phone, address, current_password, new_password.

    Raises:
        PasswordChangeError: new password without a correct current one.
    """
    new_password = data.get('new_password')
    if new_password:
        current_password = data.get('current_password')
        if not current_password:
            raise PasswordChangeError("Current password required")
        if not user.check_password(current_password):
            raise PasswordChangeError("Current password incorrect")
        user.set_password(new_password)
        user.save(update_fields=['password'])
        logger.info("Password changed for user %s", user.pk)

    changed = [key for key in PROFILE_FIELDS if key in data]
    if changed:
        profile = get_profile(user)
        for key in changed:
            setattr(profile, key, data[key] or '')
        profile.save(update_fields=changed + ['updated_at'])
    return user


def recent_users():
    return User.objects.select_related('profile').order_by('-date_joined')[:RECENT_USERS_LIMIT]
