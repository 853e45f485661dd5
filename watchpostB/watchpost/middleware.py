from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth.models import AnonymousUser
from rest_framework.authtoken.models import Token


@database_sync_to_async
def get_token_user(key):
    try:
        user = Token.objects.select_related('user').get(key=key).user
    except Token.DoesNotExist:
        return AnonymousUser()
    return user if user.is_active else AnonymousUser()


class TokenAuthMiddleware(BaseMiddleware):
    """Authenticates websocket connections from a ``?token=<key>`` query parameter."""

    async def __call__(self, scope, receive, send):
        params = parse_qs(scope.get('query_string', b'').decode())
        keys = params.get('token')

        scope = dict(scope)
        scope['user'] = await get_token_user(keys[0]) if keys else AnonymousUser()

        return await super().__call__(scope, receive, send)
