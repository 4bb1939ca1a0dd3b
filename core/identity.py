"""
Identity resolution: one ``Identity`` per request, produced by the first
configured provider that recognises the caller.

Providers are listed in settings.POS_IDENTITY_PROVIDERS. Production uses the
Django session cookie and DRF bearer tokens; tests plug in their own
provider through override_settings.
"""
from dataclasses import dataclass

from django.conf import settings
from django.utils.module_loading import import_string


@dataclass(frozen=True)
class Identity:
    user: object
    source: str

    @property
    def user_id(self):
        return self.user.pk

    @property
    def role(self):
        return self.user.role


class IdentityProvider:
    """Base provider. ``resolve`` returns an Identity or None."""

    name = 'base'

    def resolve(self, request):
        raise NotImplementedError


class SessionIdentityProvider(IdentityProvider):
    """Caller authenticated through the Django session cookie."""

    name = 'session'

    def resolve(self, request):
        user = getattr(request, 'user', None)
        if user is None or not user.is_authenticated:
            return None
        return Identity(user=user, source=self.name)


class TokenIdentityProvider(IdentityProvider):
    """Caller presenting ``Authorization: Bearer <key>`` (DRF Token)."""

    name = 'token'

    def resolve(self, request):
        from rest_framework.authtoken.models import Token

        auth_header = request.META.get('HTTP_AUTHORIZATION', '')
        if not auth_header.startswith('Bearer '):
            return None
        key = auth_header[7:].strip()
        if not key:
            return None
        token = Token.objects.select_related('user').filter(key=key).first()
        if token is None:
            return None
        return Identity(user=token.user, source=self.name)


def get_identity_providers():
    return [import_string(path)() for path in settings.POS_IDENTITY_PROVIDERS]


def resolve_identity(request):
    for provider in get_identity_providers():
        identity = provider.resolve(request)
        if identity is not None:
            return identity
    return None
