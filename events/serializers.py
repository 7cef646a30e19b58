from rest_framework import serializers

from .models import Event
from .datetime_utils import is_registration_open, event_phase


class EventSerializer(serializers.ModelSerializer):
    registration_open = serializers.SerializerMethodField()
    phase = serializers.SerializerMethodField()
    created_by_name = serializers.CharField(source="created_by.display_name", read_only=True, default=None)

    class Meta:
        model = Event
        fields = [
            "id",
            "name",
            "description",
            "category",
            "start_date",
            "end_date",
            "registration_deadline",
            "registration_open",
            "phase",
            "organizer",
            "website",
            "domain",
            "created_by",
            "created_by_name",
            "is_active",
            "created_at",
        ]
        read_only_fields = ["id", "domain", "created_by", "created_at"]

    def get_registration_open(self, obj):
        return is_registration_open(obj)

    def get_phase(self, obj):
        return event_phase(obj)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Event name cannot be blank.")
        return value

    def validate(self, attrs):
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        deadline = attrs.get("registration_deadline", getattr(self.instance, "registration_deadline", None))

        if start and end and end < start:
            raise serializers.ValidationError({"end_date": "End date must be after the start date."})
        if deadline and end and deadline > end:
            raise serializers.ValidationError(
                {"registration_deadline": "Registration must close before the event ends."}
            )
        return attrs
