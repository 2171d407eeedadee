# Service failures, mapped to an HTTP status and a {"success": False} body by the app

from typing import Optional

from fastapi import status


class ServiceError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateEmail(ServiceError):
    status_code = status.HTTP_200_OK
    default_message = "Email already exists. Please use a different email."


class InvalidCredentials(ServiceError):
    status_code = status.HTTP_200_OK
    default_message = "Invalid Credentials. Try Again!"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Record not found"


class InvalidIdentifier(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid identifier"
