"""
Function-based auth views: login, logout, current user, demo login for the
seeded test accounts, switching between them, and the test-account listing.

Login establishes a Django session (for the browser SPA) and also returns a
DRF token for API clients that prefer ``Authorization: Bearer``.
"""
import logging

from django.conf import settings
from django.contrib.auth import login as auth_login, logout as auth_logout
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods
from rest_framework.authtoken.models import Token

from core.constants import TEST_ACCOUNTS
from core.exceptions import NotFound
from core.models import User
from core.permissions import auth_required
from core.utils import iso, parse_json_body, require_text

logger = logging.getLogger(__name__)

MODEL_BACKEND = 'django.contrib.auth.backends.ModelBackend'


def _user_to_dict(user):
    if not user:
        return None
    return {
        'id': user.id,
        'username': user.username,
        'email': user.email or '',
        'firstName': user.first_name or '',
        'lastName': user.last_name or '',
        'role': user.role,
        'isActive': user.is_active,
        'createdAt': iso(user.created_at),
    }


def _session_login(request, user):
    auth_login(request, user, backend=MODEL_BACKEND)
    token, _ = Token.objects.get_or_create(user=user)
    return token


@require_http_methods(['POST'])
def login(request):
    """POST JSON { "username", "password" }. Returns { "token", "user" } and sets the session cookie."""
    body = parse_json_body(request)
    username = require_text(body, 'username')
    password = body.get('password') or ''
    if not password:
        return JsonResponse({'message': 'password is required'}, status=400)
    user = User.objects.filter(username=username).first()
    if user is None or not user.check_password(password):
        logger.warning('Failed login for %r', username)
        return JsonResponse({'message': 'Invalid credentials'}, status=401)
    if not user.is_active:
        return JsonResponse({'message': 'Account disabled'}, status=403)
    token = _session_login(request, user)
    logger.info('User %s logged in', user.pk)
    return JsonResponse({'token': token.key, 'user': _user_to_dict(user)})


@require_http_methods(['POST'])
def logout(request):
    """End the session and revoke the bearer token of the caller, if any."""
    user = request.user if request.user.is_authenticated else None
    auth_header = request.META.get('HTTP_AUTHORIZATION', '')
    if auth_header.startswith('Bearer '):
        Token.objects.filter(key=auth_header[7:].strip()).delete()
    elif user is not None:
        Token.objects.filter(user=user).delete()
    auth_logout(request)
    return JsonResponse({'message': 'Logged out'})


@auth_required
@require_http_methods(['GET'])
def current_user(request):
    return JsonResponse(_user_to_dict(request.user))


@require_http_methods(['POST'])
def demo_login(request):
    """
    POST { "username", "password" } for one of the seeded test accounts.
    Performs an ordinary session login; disabled unless POS_DEMO_LOGIN_ENABLED.
    """
    if not getattr(settings, 'POS_DEMO_LOGIN_ENABLED', False):
        raise NotFound('Demo login is disabled')
    body = parse_json_body(request)
    username = (body.get('username') or '').strip()
    password = body.get('password') or ''
    account = TEST_ACCOUNTS.get(username)
    if account is None or account['password'] != password:
        return JsonResponse({'message': 'Invalid credentials'}, status=401)
    user = User.objects.filter(username=username).first()
    if user is None:
        return JsonResponse({'message': 'User not found'}, status=404)
    if not user.is_active:
        return JsonResponse({'message': 'Account disabled'}, status=403)
    token = _session_login(request, user)
    logger.info('Demo login as %s', username)
    return JsonResponse({
        'message': 'Demo login successful',
        'token': token.key,
        'user': _user_to_dict(user),
    })


@auth_required
@require_http_methods(['POST'])
def switch_test_account(request):
    """
    POST { "username" } of another seeded test account. Logs the caller in as
    that account; only test accounts may switch, and only while demo login is on.
    """
    if not getattr(settings, 'POS_DEMO_LOGIN_ENABLED', False):
        raise NotFound('Demo login is disabled')
    previous = request.user.username
    if previous not in TEST_ACCOUNTS:
        return JsonResponse({'message': 'Only test accounts can switch'}, status=403)
    body = parse_json_body(request)
    username = require_text(body, 'username')
    user = None
    if username in TEST_ACCOUNTS:
        user = User.objects.filter(username=username).first()
    if user is None:
        raise NotFound('Test account not found')
    if not user.is_active:
        return JsonResponse({'message': 'Account disabled'}, status=403)
    token = _session_login(request, user)
    logger.info('Test account switch %s -> %s', previous, username)
    return JsonResponse({
        'message': 'Switched to test account',
        'token': token.key,
        'user': _user_to_dict(user),
    })


@require_http_methods(['POST'])
def demo_logout(request):
    auth_logout(request)
    return JsonResponse({'message': 'Demo logout successful'})


@auth_required
@require_http_methods(['GET'])
def test_accounts(request):
    """The five seeded accounts (without passwords) and whether each exists yet."""
    existing = dict(
        User.objects.filter(username__in=list(TEST_ACCOUNTS)).values_list('username', 'id')
    )
    return JsonResponse([
        {
            'id': existing.get(username),
            'username': username,
            'email': account['email'],
            'firstName': account['first_name'],
            'lastName': account['last_name'],
            'role': account['role'].value,
        }
        for username, account in TEST_ACCOUNTS.items()
    ], safe=False)
