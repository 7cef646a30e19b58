# teams/views.py - Team formation API

from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView
from django.shortcuts import get_object_or_404

from .models import Team, TeamRequest
from .permissions import IsTeamMember
from .relay import team_history
from .serializers import (
    TeamSerializer,
    TeamDetailSerializer,
    TeamRequestSerializer,
    JoinRequestSerializer,
    RequestDecisionSerializer,
    MessageSerializer,
)
from .services import TeamService, TeamRequestService


class TeamViewSet(mixins.CreateModelMixin,
                  mixins.RetrieveModelMixin,
                  mixins.ListModelMixin,
                  viewsets.GenericViewSet):
    """
    Create, browse and join teams; leaders manage their request inbox.
    """
    queryset = Team.objects.select_related('leader', 'event')
    serializer_class = TeamSerializer
    permission_classes = [IsAuthenticated]

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return TeamDetailSerializer
        return TeamSerializer

    def list(self, request, *args, **kwargs):
        """
        GET /api/teams/?category=hackathon

        With a category: active teams in that category.
        Without: active teams the caller has not joined yet.
        """
        category = request.query_params.get('category')
        if category:
            qs = TeamService.teams_by_category(category)
        else:
            qs = TeamService.recommended_teams(request.user)
        qs = qs.select_related('leader', 'event').order_by('-created_at')
        return Response(TeamSerializer(qs, many=True).data)

    @action(detail=False, methods=['get'], url_path='my')
    def my_teams(self, request):
        """GET /api/teams/my/ - teams the caller belongs to"""
        qs = TeamService.teams_for_user(request.user).select_related('leader', 'event').order_by('-created_at')
        return Response(TeamSerializer(qs, many=True).data)

    @action(detail=False, methods=['get'], url_path='my/requests/pending')
    def my_pending_requests(self, request):
        """GET /api/teams/my/requests/pending/ - inbox across every team the caller leads"""
        pending = TeamRequestService.pending_requests_for_leader(request.user)
        return Response(TeamRequestSerializer(pending, many=True).data)

    @action(detail=True, methods=['post'], url_path='join')
    def join(self, request, pk=None):
        """
        POST /api/teams/{id}/join/
        Body: {"message": "optional note to the leader"}
        """
        team = self.get_object()
        serializer = JoinRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        team_request = TeamRequestService.submit_join_request(
            team, request.user, serializer.validated_data.get('message')
        )
        return Response(TeamRequestSerializer(team_request).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['get', 'delete'], url_path='requests')
    def requests(self, request, pk=None):
        """
        GET    /api/teams/{id}/requests/  pending requests (leader only)
        DELETE /api/teams/{id}/requests/  wipe the inbox (leader only)
        """
        team = self.get_object()

        if request.method == 'DELETE':
            cleared = TeamRequestService.clear_all_requests(team, request.user)
            return Response({'cleared': cleared})

        pending = TeamRequestService.list_pending_requests(team, request.user)
        return Response(TeamRequestSerializer(pending, many=True).data)

    @action(detail=True, methods=['get'], url_path='messages', permission_classes=[IsAuthenticated, IsTeamMember])
    def messages(self, request, pk=None):
        """GET /api/teams/{id}/messages/ - chat history, newest first (members only)"""
        team = self.get_object()
        return Response(MessageSerializer(team_history(team), many=True).data)


class TeamRequestDecisionView(APIView):
    """
    PUT /api/team-requests/{id}/
    Body: {"status": "approved" | "rejected"}
    """
    permission_classes = [IsAuthenticated]

    def put(self, request, pk):
        team_request = get_object_or_404(TeamRequest.objects.select_related('team'), pk=pk)

        serializer = RequestDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        decided = TeamRequestService.decide_request(
            team_request, serializer.validated_data['status'], actor=request.user
        )
        return Response(TeamRequestSerializer(decided).data, status=status.HTTP_200_OK)

    patch = put
