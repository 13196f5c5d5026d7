from rest_framework import serializers

from authentication.api.serializers import UserSummarySerializer
from jobs.models import Job, JobApplication
from utils.serializers import DistanceFieldsMixin, StringListField


class JobSerializer(DistanceFieldsMixin, serializers.ModelSerializer):
    employer = UserSummarySerializer(read_only=True)

    class Meta:
        model = Job
        fields = (
            "id",
            "employer",
            "title",
            "company",
            "description",
            "requirements",
            "skills_required",
            "job_type",
            "experience_level",
            "salary_min",
            "salary_max",
            "salary_currency",
            "category",
            "application_deadline",
            "is_active",
            "featured",
            "location",
            "city",
            "latitude",
            "longitude",
            "is_boosted",
            "boost_score",
            "boost_expires_at",
            "distance",
            "distance_display",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class JobWriteSerializer(serializers.ModelSerializer):
    requirements = StringListField(required=False)
    skills_required = StringListField(required=False)

    class Meta:
        model = Job
        fields = (
            "title",
            "company",
            "description",
            "requirements",
            "skills_required",
            "job_type",
            "experience_level",
            "salary_min",
            "salary_max",
            "salary_currency",
            "category",
            "application_deadline",
            "is_active",
            "location",
            "city",
            "latitude",
            "longitude",
        )

    def validate(self, attrs):
        salary_min = attrs.get("salary_min", getattr(self.instance, "salary_min", None))
        salary_max = attrs.get("salary_max", getattr(self.instance, "salary_max", None))
        if salary_min is not None and salary_max is not None and salary_min > salary_max:
            raise serializers.ValidationError({"salary_max": "Maximum salary must be at least the minimum."})
        return attrs


class JobSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Job
        fields = ("id", "title", "company", "job_type", "location", "is_active")
        read_only_fields = fields


class JobApplicationSerializer(serializers.ModelSerializer):
    applicant = UserSummarySerializer(read_only=True)
    job = JobSummarySerializer(read_only=True)

    class Meta:
        model = JobApplication
        fields = (
            "id",
            "job",
            "applicant",
            "cover_letter",
            "resume_url",
            "portfolio_url",
            "expected_salary",
            "availability_date",
            "additional_info",
            "notes",
            "status",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class JobApplyRequestSerializer(serializers.Serializer):
    cover_letter = serializers.CharField(required=False, allow_blank=True)
    resume_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    portfolio_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    expected_salary = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    availability_date = serializers.DateField(required=False, allow_null=True)
    additional_info = serializers.CharField(required=False, allow_blank=True)


class ApplicationStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=JobApplication.STATUS_CHOICES)
    notes = serializers.CharField(required=False, allow_blank=True)
