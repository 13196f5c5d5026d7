from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from infrastructure.container import container
from jobs.api.serializers import (
    ApplicationStatusUpdateSerializer,
    JobApplicationSerializer,
    JobApplyRequestSerializer,
    JobSerializer,
    JobWriteSerializer,
)
from jobs.models import Job
from utils.http import error_response
from utils.serializers import ErrorResponseSerializer, PaginatedResponseSerializer, serialize_page


class JobViewSet(viewsets.ViewSet):
    """Job board: public listing, employer management and applications."""

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_service(self):
        return container.job_service()

    @extend_schema(
        operation_id="jobs_list",
        summary="List open jobs",
        parameters=[
            OpenApiParameter("search", str, description="Title, company or description"),
            OpenApiParameter("job_type", str, enum=[choice[0] for choice in Job.JOB_TYPE_CHOICES]),
            OpenApiParameter("experience_level", str),
            OpenApiParameter("category", str),
            OpenApiParameter("min_salary", float, description="Jobs whose maximum salary reaches this"),
            OpenApiParameter("max_salary", float, description="Jobs whose minimum salary is at most this"),
            OpenApiParameter("city", str),
            OpenApiParameter("lat", float),
            OpenApiParameter("lon", float),
            OpenApiParameter("radius", float),
            OpenApiParameter("sort_by", str, enum=["newest", "salary_high", "salary_low", "boosted", "distance"]),
            OpenApiParameter("page", int),
            OpenApiParameter("page_size", int),
        ],
        responses={200: PaginatedResponseSerializer, 400: ErrorResponseSerializer},
        tags=["Jobs"],
    )
    def list(self, request):
        result = self.get_service().list_jobs(request.query_params)
        if not result.ok:
            return error_response(result)
        return Response(serialize_page(result.value, JobSerializer))

    @extend_schema(operation_id="jobs_retrieve", responses={200: JobSerializer, 404: ErrorResponseSerializer}, tags=["Jobs"])
    def retrieve(self, request, pk=None):
        result = self.get_service().get_job(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response(JobSerializer(result.value).data)

    @extend_schema(
        operation_id="jobs_create",
        summary="Post a job",
        request=JobWriteSerializer,
        responses={201: JobSerializer, 400: ErrorResponseSerializer},
        tags=["Jobs"],
    )
    def create(self, request):
        serializer = JobWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.get_service().create_job(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(JobSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="jobs_update",
        summary="Update a job (employer only)",
        request=JobWriteSerializer,
        responses={200: JobSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Jobs"],
    )
    def partial_update(self, request, pk=None):
        serializer = JobWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        result = self.get_service().update_job(request.user, pk, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(JobSerializer(result.value).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk)

    @extend_schema(
        operation_id="jobs_delete",
        responses={204: None, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Jobs"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_job(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(operation_id="jobs_mine", responses={200: JobSerializer(many=True)}, tags=["Jobs"])
    @action(detail=False, methods=["get"])
    def mine(self, request):
        return Response(JobSerializer(self.get_service().my_jobs(request.user).value, many=True).data)

    @extend_schema(
        operation_id="jobs_apply",
        summary="Apply to a job",
        description="""
        Rejected when the job is closed, past its deadline, posted by the caller,
        or already applied to (409).
        """,
        request=JobApplyRequestSerializer,
        responses={
            201: JobApplicationSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Already applied"),
        },
        tags=["Jobs - Applications"],
    )
    @action(detail=True, methods=["post"])
    def apply(self, request, pk=None):
        serializer = JobApplyRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = container.job_application_service().apply(request.user, pk, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(JobApplicationSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="jobs_applications",
        summary="Applications received for a job (employer only)",
        responses={200: JobApplicationSerializer(many=True), 403: ErrorResponseSerializer},
        tags=["Jobs - Applications"],
    )
    @action(detail=True, methods=["get"])
    def applications(self, request, pk=None):
        result = container.job_application_service().list_applications(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(JobApplicationSerializer(result.value, many=True).data)


class JobApplicationViewSet(viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="job_applications_mine",
        summary="My job applications",
        responses={200: JobApplicationSerializer(many=True)},
        tags=["Jobs - Applications"],
    )
    def list(self, request):
        result = container.job_application_service().my_applications(request.user)
        return Response(JobApplicationSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="job_applications_update_status",
        summary="Update an application's status (employer only)",
        request=ApplicationStatusUpdateSerializer,
        responses={200: JobApplicationSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Jobs - Applications"],
    )
    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request, pk=None):
        serializer = ApplicationStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = container.job_application_service().update_application_status(
            request.user, pk, serializer.validated_data["status"], notes=serializer.validated_data.get("notes")
        )
        if not result.ok:
            return error_response(result)
        return Response(JobApplicationSerializer(result.value).data)
