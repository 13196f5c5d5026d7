from rest_framework import serializers

from authentication.api.serializers import UserSummarySerializer
from events.models import Event, EventApplication, EventRegistration
from utils.serializers import DistanceFieldsMixin, StringListField


class EventSerializer(DistanceFieldsMixin, serializers.ModelSerializer):
    organizer = UserSummarySerializer(read_only=True)
    is_free = serializers.BooleanField(read_only=True)
    spots_left = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Event
        fields = (
            "id",
            "organizer",
            "title",
            "description",
            "category",
            "start_date",
            "end_date",
            "start_time",
            "end_time",
            "venue",
            "location",
            "city",
            "latitude",
            "longitude",
            "price",
            "is_free",
            "max_attendees",
            "current_attendees",
            "spots_left",
            "images",
            "tags",
            "is_active",
            "featured",
            "is_boosted",
            "boost_score",
            "boost_expires_at",
            "distance",
            "distance_display",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class EventWriteSerializer(serializers.ModelSerializer):
    tags = StringListField(required=False)
    images = serializers.ListField(child=serializers.URLField(max_length=500), required=False)

    class Meta:
        model = Event
        fields = (
            "title",
            "description",
            "category",
            "start_date",
            "end_date",
            "start_time",
            "end_time",
            "venue",
            "location",
            "city",
            "latitude",
            "longitude",
            "price",
            "max_attendees",
            "images",
            "tags",
            "is_active",
        )

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative.")
        return value

    def validate(self, attrs):
        start_date = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end_date = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError({"end_date": "End date cannot be before the start date."})
        return attrs


class EventSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Event
        fields = ("id", "title", "start_date", "start_time", "venue", "city", "price")
        read_only_fields = fields


class EventRegistrationSerializer(serializers.ModelSerializer):
    event = EventSummarySerializer(read_only=True)
    attendee = UserSummarySerializer(read_only=True)

    class Meta:
        model = EventRegistration
        fields = (
            "id",
            "event",
            "attendee",
            "full_name",
            "email",
            "phone",
            "special_requests",
            "ticket_type",
            "quantity",
            "total_price",
            "status",
            "payment_status",
            "attended",
            "check_in_time",
            "created_at",
        )
        read_only_fields = fields


class RegisterRequestSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    special_requests = serializers.CharField(required=False, allow_blank=True)
    ticket_type = serializers.ChoiceField(choices=EventRegistration.TICKET_TYPE_CHOICES, required=False)
    quantity = serializers.IntegerField(min_value=1, max_value=20, required=False, default=1)


class EventApplicationSerializer(serializers.ModelSerializer):
    event = EventSummarySerializer(read_only=True)
    artiste = UserSummarySerializer(read_only=True)
    stage_name = serializers.CharField(source="artiste_profile.stage_name", read_only=True, default=None)

    class Meta:
        model = EventApplication
        fields = (
            "id",
            "event",
            "artiste",
            "stage_name",
            "role_applied",
            "proposal",
            "quoted_price",
            "status",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class EventApplyRequestSerializer(serializers.Serializer):
    role_applied = serializers.CharField(max_length=100)
    proposal = serializers.CharField()
    quoted_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True, min_value=0)


class EventApplicationStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=EventApplication.STATUS_CHOICES)
