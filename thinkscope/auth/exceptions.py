"""Authentication-specific exceptions."""

from fastapi import HTTPException, status


class AuthenticationError(HTTPException):
    """Base authentication error."""

    def __init__(self, detail: str = "Authentication failed") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class MissingTokenError(AuthenticationError):
    """No bearer token on the request."""

    def __init__(self) -> None:
        super().__init__(detail="Not authorized, no token")


class InvalidTokenError(AuthenticationError):
    """Invalid token provided."""

    def __init__(self) -> None:
        super().__init__(detail="Not authorized, token failed")


class TokenExpiredError(AuthenticationError):
    """Token has expired."""

    def __init__(self) -> None:
        super().__init__(detail="Token has expired")


class InvalidCredentialsError(AuthenticationError):
    """Invalid credentials provided."""

    def __init__(self) -> None:
        super().__init__(detail="Invalid email or password")
