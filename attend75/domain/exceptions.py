"""Domain-specific exceptions"""

from typing import List
from attend75.domain.models import FieldError


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidAttendanceInputError(DomainException):
    """Form state failed validation; the projector must not be run on it"""

    def __init__(self, errors: List[FieldError]):
        self.errors = errors
        fields = ", ".join(sorted({e.field for e in errors}))
        super().__init__(f"Invalid attendance input: {fields}")
