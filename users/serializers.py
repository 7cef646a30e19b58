from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    domain = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'domain',
            'role',
            'name',
            'avatar',
            'university',
            'department',
            'age',
            'gender',
            'bio',
            'social_links',
            'achievements',
            'skills',
            'interests',
            'is_profile_complete',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PublicUserSerializer(serializers.ModelSerializer):
    """Fields anyone signed in may see about another student."""

    class Meta:
        model = User
        fields = [
            'id',
            'name',
            'username',
            'avatar',
            'university',
            'department',
            'skills',
            'interests',
            'bio',
        ]


class UpdateProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            'username', 'name', 'avatar', 'university', 'department', 'age',
            'gender', 'bio', 'social_links', 'achievements', 'skills', 'interests',
        ]

    def _validate_string_list(self, value, field):
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError(f"{field} must be a list of strings.")
        return [item.strip() for item in value if item.strip()]

    def validate_skills(self, value):
        return self._validate_string_list(value, "skills")

    def validate_interests(self, value):
        return self._validate_string_list(value, "interests")

    def validate_social_links(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("social_links must be an object.")
        return value

    def update(self, instance, validated_data):
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.is_profile_complete = True
        instance.save()
        return instance
