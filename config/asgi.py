import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

# Initialise Django before importing consumers (they touch the ORM).
django_asgi_app = get_asgi_application()

from channels.routing import ProtocolTypeRouter, URLRouter  # noqa: E402
from teams.routing import websocket_urlpatterns  # noqa: E402

# The chat socket is deliberately unauthenticated: every open connection
# receives every team's traffic and clients filter by team id.
application = ProtocolTypeRouter({
    "http": django_asgi_app,
    "websocket": URLRouter(websocket_urlpatterns),
})
