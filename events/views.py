from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.exceptions import PermissionDenied
from rest_framework import status
import logging

from events.models import Event
from events.serializers import EventSerializer

logger = logging.getLogger("teamsync.events")


class EventListCreateView(APIView):
    """
    GET  /api/events/            active events visible to the caller's domain
    POST /api/events/            institution accounts publish an event
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        qs = Event.objects.active().visible_to(request.user)

        category = request.query_params.get("category")
        if category:
            qs = qs.filter(category=category)

        qs = qs.select_related("created_by").order_by("-start_date")
        serializer = EventSerializer(qs, many=True, context={"request": request})
        return Response(serializer.data)

    def post(self, request):
        user = request.user
        if not user.is_institution:
            raise PermissionDenied("Only institution accounts can create events.")

        serializer = EventSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)

        event = serializer.save(
            created_by=user,
            domain=user.domain,
            organizer=serializer.validated_data.get("organizer") or user.display_name,
        )
        logger.info(
            f"Event created: event={event.id}, domain={event.domain}, actor={user.id}"
        )
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)
