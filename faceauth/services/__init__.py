"""High-level services for face authentication.

This package contains the services that orchestrate extraction, ranking
and decision, and the enrollment workflow that feeds the roster.
"""

from faceauth.services.authentication import AuthenticationService
from faceauth.services.enrollment import EnrollmentService

__all__ = [
    "AuthenticationService",
    "EnrollmentService",
]
