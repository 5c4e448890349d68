from fastapi import HTTPException, status


class UserAlreadyExistsException(HTTPException):
    def __init__(self, field: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": f"User with this {field} already exists.", "field": field},
        )


class InvalidCredentialsException(HTTPException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Invalid email or password."},
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotAuthenticatedException(HTTPException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Not authenticated."},
            headers={"WWW-Authenticate": "Bearer"},
        )


# ------------------ Domain errors ------------------ #

class ContactNotFound(Exception):
    """Raised for a missing contact and for a contact owned by someone else."""

    def __init__(self):
        super().__init__("Contact not found.")


class DuplicateContactField(Exception):
    """A contact of the same owner already uses the given email and/or phone."""

    def __init__(self, *fields: str):
        self.fields = tuple(fields)
        super().__init__(f"A contact with this {' and '.join(self.fields)} already exists.")

    @property
    def field(self) -> str:
        return self.fields[0]
