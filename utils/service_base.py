"""
Base classes and utilities for the service layer.

Every app keeps its business logic in small service classes that return a
ServiceResult instead of raising for expected outcomes. Views translate the
error code into an HTTP status (see utils.http).

Guidelines
- Keep services stateless; pass dependencies via the constructor.
- Return service_err(...) for expected failures (not found, forbidden, conflict).
- Reserve exceptions for truly exceptional/unrecoverable scenarios.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    A result type that encapsulates success or failure from service operations.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Error code (present if ok=False)
        error_detail: Human-readable error message (present if ok=False)

    Examples:
        >>> result = service_ok(job)
        >>> if result.ok:
        ...     return Response(JobSerializer(result.value).data, 200)

        >>> result = service_err(ErrorCodes.JOB_NOT_FOUND, "Job 123 does not exist")
        >>> result.error
        'job_not_found'
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None

    def map(self, func: Callable[[T], Any]) -> "ServiceResult":
        """Transform the success value if ok=True, otherwise pass through the error."""
        if self.ok and self.value is not None:
            try:
                return service_ok(func(self.value))
            except Exception as e:
                return service_err("transformation_error", str(e))
        return self

    def flat_map(self, func: Callable[[T], "ServiceResult"]) -> "ServiceResult":
        """Chain service operations that return ServiceResult."""
        if self.ok and self.value is not None:
            return func(self.value)
        return self

    def to_dict(self) -> dict:
        if self.ok:
            return {"success": True, "data": self.value}
        return {
            "success": False,
            "error": {"code": self.error, "message": self.error_detail},
        }


def service_ok(value: T = None) -> ServiceResult[T]:
    """Create a successful ServiceResult."""
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "") -> ServiceResult:
    """
    Create a failed ServiceResult.

    Args:
        error: Error code (e.g., "product_not_found", "insufficient_credits")
        error_detail: Human-readable error message, defaults to the code
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error)


class ServiceError(Exception):
    """Raised for unrecoverable service conditions.

    Prefer returning ServiceResult for expected failures. Raise ServiceError
    only for conditions the caller cannot gracefully handle.
    """

    pass


class BaseService:
    """
    Base class for all services providing common functionality.

    Provides:
    - Logging with class name
    - Performance timing decorator

    Usage:
        class JobService(BaseService):
            @BaseService.log_performance
            def list_jobs(self, filters):
                self.logger.info(f"Listing jobs with filters: {filters}")
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log performance of service methods.

        Failed ServiceResults are logged as warnings, raised exceptions as errors
        (with traceback) before being re-raised.
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000

                if isinstance(result, ServiceResult):
                    if result.ok:
                        self.logger.info(f"{method_name} completed successfully in {elapsed_time:.2f}ms")
                    else:
                        self.logger.warning(
                            f"{method_name} failed with error '{result.error}' in {elapsed_time:.2f}ms"
                        )
                else:
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")

                return result

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"{method_name} raised exception after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper


class ErrorCodes:
    """Standard error codes used across services."""

    # Generic
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    VALIDATION_ERROR = "validation_error"
    INVALID_INPUT = "invalid_input"
    CONFLICT = "conflict"
    INTERNAL_ERROR = "internal_error"

    # Accounts
    USER_NOT_FOUND = "user_not_found"
    CANNOT_MODIFY_SELF = "cannot_modify_self"

    # Entities (shared features)
    UNKNOWN_ENTITY_TYPE = "unknown_entity_type"
    ENTITY_NOT_FOUND = "entity_not_found"
    NOT_ENTITY_OWNER = "not_entity_owner"

    # Products / cart / orders
    PRODUCT_NOT_FOUND = "product_not_found"
    PRODUCT_INACTIVE = "product_inactive"
    INSUFFICIENT_STOCK = "insufficient_stock"
    CANNOT_BUY_OWN_PRODUCT = "cannot_buy_own_product"
    INVALID_QUANTITY = "invalid_quantity"
    ITEM_NOT_IN_CART = "item_not_in_cart"
    CART_EMPTY = "cart_empty"
    INVALID_ADDRESS = "invalid_address"
    ORDER_NOT_FOUND = "order_not_found"
    INVALID_ORDER_STATE = "invalid_order_state"
    ORDER_ALREADY_PAID = "order_already_paid"

    # Payments
    PAYMENT_FAILED = "payment_failed"
    PAYMENT_PROVIDER_ERROR = "payment_provider_error"
    PAYMENT_NOT_SUCCEEDED = "payment_not_succeeded"
    PAYMENT_MISMATCH = "payment_mismatch"

    # Jobs
    JOB_NOT_FOUND = "job_not_found"
    JOB_CLOSED = "job_closed"
    ALREADY_APPLIED = "already_applied"
    APPLICATION_NOT_FOUND = "application_not_found"

    # Events
    EVENT_NOT_FOUND = "event_not_found"
    EVENT_SOLD_OUT = "event_sold_out"
    ALREADY_REGISTERED = "already_registered"
    REGISTRATION_NOT_FOUND = "registration_not_found"

    # Talent
    PROFILE_NOT_FOUND = "profile_not_found"
    HIRE_NOT_FOUND = "hire_not_found"
    INVALID_STATUS_TRANSITION = "invalid_status_transition"

    # Credits / boosts
    INSUFFICIENT_CREDITS = "insufficient_credits"
    INVALID_PACKAGE = "invalid_package"
    INVALID_PLAN = "invalid_plan"
    ALREADY_BOOSTED = "already_boosted"
    NOT_BOOSTABLE = "not_boostable"

    # Reviews / messaging / notifications
    CANNOT_REVIEW_OWN = "cannot_review_own"
    REVIEW_NOT_FOUND = "review_not_found"
    CANNOT_MESSAGE_SELF = "cannot_message_self"
    NOTIFICATION_NOT_FOUND = "notification_not_found"
