from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger("teamsync.api")


class Conflict(APIException):
    """Duplicate resource or illegal state transition."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Request conflicts with the current state of the resource."
    default_code = "conflict"


def first_error_message(detail) -> str:
    """
    Flatten a DRF error payload into one human readable string.

    DRF details can be a string, a list of strings, or a dict of
    field -> list. The first message found wins.
    """
    if isinstance(detail, dict):
        if "detail" in detail:
            return first_error_message(detail["detail"])
        for field, value in detail.items():
            message = first_error_message(value)
            if field == "non_field_errors":
                return message
            return f"{field}: {message}"
        return ""
    if isinstance(detail, (list, tuple)):
        return first_error_message(detail[0]) if detail else ""
    return str(detail)


def custom_exception_handler(exc, context):
    """
    Wrap DRF + Django exceptions into a consistent response format.

    Success responses (2xx) are not touched.
    Only errors come through here. Every error body carries a flat
    ``error`` string next to the raw DRF ``errors`` payload.
    """
    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        return Response(
            {
                "success": False,
                "status_code": response.status_code,
                "error": first_error_message(response.data),
                "errors": response.data,
            },
            status=response.status_code,
            headers={
                key: value for key, value in response.items()
                if key in ("WWW-Authenticate", "Retry-After")
            },
        )

    # Unhandled exceptions -> 500
    logger.exception("Unhandled API exception", exc_info=exc)

    return Response(
        {
            "success": False,
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "error": "Internal server error.",
            "errors": {"detail": "Internal server error."},
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
