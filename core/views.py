from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from django.db import connections
from django.db.utils import OperationalError
from django.conf import settings
import time


class HealthCheckView(APIView):
    """
    Uptime probe: database reachability plus which channel layer the chat
    relay is running on (in-memory layers do not fan out across workers).
    """
    permission_classes = [AllowAny]
    authentication_classes = []  # public endpoint

    def get(self, request, *args, **kwargs):
        start = time.time()

        db_ok = True
        try:
            connections["default"].cursor()
        except OperationalError:
            db_ok = False

        duration_ms = int((time.time() - start) * 1000)
        layer_backend = settings.CHANNEL_LAYERS["default"]["BACKEND"]

        return Response(
            {
                "status": "ok" if db_ok else "degraded",
                "db": db_ok,
                "chat_layer": layer_backend.rsplit(".", 1)[-1],
                "env": getattr(settings, "ENV", "unknown"),
                "latency_ms": duration_ms,
            }
        )
