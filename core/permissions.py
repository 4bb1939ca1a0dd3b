"""
Role-based access control for the API: decorators applied to every view.

auth_required resolves the caller through the configured identity providers
and attaches ``request.identity``; role_required checks the caller's role
against the operation's allow-list. Both answer before the view body runs,
so a rejected caller never reaches a state mutation.
"""
import logging
from functools import wraps

from django.http import JsonResponse

from core.identity import resolve_identity
from core.models import UserRole

logger = logging.getLogger(__name__)


# --- Allow-lists per operation ---

KOT_CREATORS = (UserRole.RESTAURANT_CASHIER, UserRole.BARMAN)
KOT_PROCESSORS = (UserRole.STORE_KEEPER, UserRole.AUTHORISING_OFFICER)
STOCK_REQUESTERS = (UserRole.STORE_KEEPER,)
STOCK_VIEWERS = (UserRole.STORE_KEEPER, UserRole.AUTHORISING_OFFICER)
APPROVERS = (UserRole.AUTHORISING_OFFICER,)
REVERSAL_REQUESTERS = (UserRole.RESTAURANT_CASHIER, UserRole.BARMAN, UserRole.STORE_KEEPER)
BILLERS = (UserRole.RESTAURANT_CASHIER, UserRole.BARMAN)
LOW_STOCK_VIEWERS = (UserRole.ADMIN, UserRole.AUTHORISING_OFFICER, UserRole.STORE_KEEPER)
ADMINS = (UserRole.ADMIN,)


def auth_required(view_func):
    """Decorator: resolve the caller's identity. 401 if none, 403 if the account is disabled."""
    @wraps(view_func)
    def wrapped(request, *args, **kwargs):
        identity = resolve_identity(request)
        if identity is None:
            return JsonResponse({'message': 'Unauthorized'}, status=401)
        if not identity.user.is_active:
            return JsonResponse({'message': 'Account disabled'}, status=403)
        request.identity = identity
        request.user = identity.user
        return view_func(request, *args, **kwargs)
    return wrapped


def has_role(identity, allowed_roles):
    return identity is not None and identity.role in allowed_roles


def role_required(*allowed_roles):
    """
    Decorator factory: after auth_required, require request.identity.role in allowed_roles.
    Return 403 with message if not.
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapped(request, *args, **kwargs):
            identity = getattr(request, 'identity', None)
            if not has_role(identity, allowed_roles):
                logger.warning(
                    'Denied %s %s for user %s (role %s)',
                    request.method,
                    request.path,
                    identity.user_id if identity else None,
                    identity.role if identity else None,
                )
                return JsonResponse({'message': 'Insufficient permissions'}, status=403)
            return view_func(request, *args, **kwargs)
        return wrapped
    return decorator
