# afterschool/core/exceptions.py
"""
Domain-specific exceptions for the booking API.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        """Default conversion to HTTPException (override in subclasses)."""
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when business validation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


# Specific business exceptions


class InvalidRequestException(ValidationException):
    """Raised when an order request is missing fields or has malformed lines."""

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message or "Invalid order data",
            code="INVALID_REQUEST",
            details=details or {},
        )


class InvalidNameException(ValidationException):
    """Raised when the customer name holds anything but letters and whitespace."""

    def __init__(self, name: str):
        super().__init__(
            message="Name must contain only letters",
            code="INVALID_NAME",
            details={"name": name},
        )


class InvalidPhoneException(ValidationException):
    """Raised when the customer phone holds anything but digits."""

    def __init__(self, phone: str):
        super().__init__(
            message="Phone must contain only numbers",
            code="INVALID_PHONE",
            details={"phone": phone},
        )


class LessonNotFoundException(NotFoundException):
    def __init__(self, lesson_id: Any):
        super().__init__(
            message=f"Lesson {lesson_id} not found",
            code="LESSON_NOT_FOUND",
            details={"lesson_id": lesson_id},
        )


class InsufficientCapacityException(ValidationException):
    """Raised when a lesson has fewer remaining spaces than requested."""

    def __init__(self, lesson_id: str, subject: str, requested: int):
        super().__init__(
            message=f"Not enough spaces for {subject}",
            code="INSUFFICIENT_CAPACITY",
            details={"lesson_id": lesson_id, "subject": subject, "requested": requested},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    Used when data access operations fail, such as database connection
    issues, query failures, or constraint violations.
    """
