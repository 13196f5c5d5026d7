"""Translate failed ServiceResults into DRF responses."""

from rest_framework import status
from rest_framework.response import Response

from .service_base import ErrorCodes, ServiceResult

ERROR_STATUS_MAP = {
    ErrorCodes.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ITEM_NOT_IN_CART: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ORDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.JOB_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.APPLICATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.REGISTRATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.PROFILE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.HIRE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.REVIEW_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.NOTIFICATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCodes.NOT_ENTITY_OWNER: status.HTTP_403_FORBIDDEN,
    ErrorCodes.CANNOT_MODIFY_SELF: status.HTTP_403_FORBIDDEN,
    ErrorCodes.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCodes.ALREADY_APPLIED: status.HTTP_409_CONFLICT,
    ErrorCodes.ALREADY_REGISTERED: status.HTTP_409_CONFLICT,
    ErrorCodes.EVENT_SOLD_OUT: status.HTTP_409_CONFLICT,
    ErrorCodes.ALREADY_BOOSTED: status.HTTP_409_CONFLICT,
    ErrorCodes.ORDER_ALREADY_PAID: status.HTTP_409_CONFLICT,
    ErrorCodes.INSUFFICIENT_CREDITS: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorCodes.PAYMENT_PROVIDER_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorCodes.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_status(code: str) -> int:
    """HTTP status for a service error code. Unmapped codes are client errors."""
    return ERROR_STATUS_MAP.get(code, status.HTTP_400_BAD_REQUEST)


def error_response(result: ServiceResult) -> Response:
    return Response({"detail": result.error_detail, "code": result.error}, status=error_status(result.error))
