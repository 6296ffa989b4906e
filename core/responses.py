"""
Unified response structures for consistent API responses.
"""

from rest_framework.response import Response
from rest_framework import status


class APIResponse:
    """Base class for standardized API responses."""

    @staticmethod
    def error(message="An error occurred", errors=None, error_code=None, status_code=status.HTTP_400_BAD_REQUEST):
        """Return an error response."""
        response_data = {
            "success": False,
            "message": message,
        }
        if errors:
            response_data["errors"] = errors
        if error_code:
            response_data["error_code"] = error_code
        return Response(response_data, status=status_code)
