"""
Service faults and the DRF exception handler that renders them.
"""

from rest_framework.views import exception_handler
from rest_framework import status
from django.core.exceptions import ValidationError

from core.responses import APIResponse


def custom_exception_handler(exc, context):
    """
    Custom exception handler that provides consistent error responses.
    """
    if isinstance(exc, ServiceException):
        return APIResponse.error(
            exc.message,
            error_code=exc.error_code,
            status_code=exc.status_code
        )

    if isinstance(exc, ValidationError):
        return APIResponse.error(
            'Validation failed',
            errors=exc.messages,
            error_code='VALIDATION_ERROR',
            status_code=status.HTTP_400_BAD_REQUEST
        )

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        if hasattr(response.data, 'get'):
            error_detail = response.data.get('detail', str(exc))
        else:
            error_detail = str(exc)
        error_code = getattr(exc, 'default_code', 'error')

        response.data = {
            'success': False,
            'message': str(error_detail),
            'error_code': str(error_code).upper()
        }

    return response


class ServiceException(Exception):
    """Base exception for faults raised by organization and access services."""

    def __init__(self, message="An error occurred", status_code=status.HTTP_400_BAD_REQUEST, error_code=None):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or 'SERVICE_ERROR'
        super().__init__(self.message)


class NotFoundException(ServiceException):
    """An identifier does not resolve to a user, department or company."""

    def __init__(self, message="Resource not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND, 'NOT_FOUND')


class InvalidArgumentException(ServiceException):
    """A required identifier is missing or an argument is malformed."""

    def __init__(self, message="Invalid argument"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, 'INVALID_ARGUMENT')
