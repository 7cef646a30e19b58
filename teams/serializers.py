# teams/serializers.py

from rest_framework import serializers

from events.models import Event
from .models import Team, TeamMember, TeamRequest, Message
from .services import TeamService
from .state_machine import DECISIONS


class TeamMemberSerializer(serializers.ModelSerializer):
    """Serializer for team members"""
    user_id = serializers.IntegerField(source='user.id', read_only=True)
    username = serializers.CharField(source='user.username', read_only=True)
    name = serializers.CharField(source='user.display_name', read_only=True)
    avatar = serializers.CharField(source='user.avatar', read_only=True)

    class Meta:
        model = TeamMember
        fields = ['id', 'user_id', 'username', 'name', 'avatar', 'role', 'status', 'joined_at']
        read_only_fields = fields


class TeamSerializer(serializers.ModelSerializer):
    leader_name = serializers.CharField(source='leader.display_name', read_only=True)
    current_size = serializers.IntegerField(read_only=True)
    is_full = serializers.BooleanField(read_only=True)
    event = serializers.PrimaryKeyRelatedField(
        queryset=Event.objects.all(), required=False, allow_null=True
    )
    max_members = serializers.IntegerField(required=False, min_value=1, max_value=50)

    class Meta:
        model = Team
        fields = [
            'id', 'name', 'description', 'leader', 'leader_name', 'max_members',
            'current_size', 'is_full', 'required_skills', 'category', 'event',
            'event_name', 'deadline', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'leader', 'created_at', 'updated_at']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Team name cannot be blank.")
        return value

    def validate_required_skills(self, value):
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError("required_skills must be a list of strings.")
        return [item.strip() for item in value if item.strip()]

    def create(self, validated_data):
        return TeamService.create_team(leader=self.context['request'].user, **validated_data)


class TeamDetailSerializer(TeamSerializer):
    members = serializers.SerializerMethodField()

    class Meta(TeamSerializer.Meta):
        fields = TeamSerializer.Meta.fields + ['members']

    def get_members(self, obj):
        approved = obj.members.filter(status=TeamMember.STATUS_APPROVED).select_related('user')
        return TeamMemberSerializer(approved, many=True).data


class TeamRequestSerializer(serializers.ModelSerializer):
    team_id = serializers.UUIDField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    user_snapshot = serializers.SerializerMethodField()

    class Meta:
        model = TeamRequest
        fields = ['id', 'team_id', 'user_id', 'message', 'status', 'created_at', 'user_snapshot']
        read_only_fields = fields

    def get_user_snapshot(self, obj):
        # Only set by the inbox listing; plain request payloads omit it.
        return getattr(obj, 'user_snapshot', None)


class JoinRequestSerializer(serializers.Serializer):
    message = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)


class RequestDecisionSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=DECISIONS)


class MessageSerializer(serializers.ModelSerializer):
    team_id = serializers.UUIDField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    sender = serializers.SerializerMethodField()

    class Meta:
        model = Message
        fields = ['id', 'team_id', 'user_id', 'sender', 'content', 'created_at']
        read_only_fields = fields

    def get_sender(self, obj):
        user = obj.user
        return {'id': user.id, 'name': user.display_name, 'avatar': user.avatar}
