"""Application errors and the HTTP status each one maps to."""

from fastapi import status

INTERNAL_ERROR_MESSAGE = "Erro interno do servidor"


class AppError(Exception):
    """Base exception for the application."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: list[str] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    @property
    def public_message(self) -> str:
        """Message that is safe to send to the client."""
        return self.message


class ValidationError(AppError):
    """Raised when a payload violates field constraints."""

    def __init__(self, details: list[str], message: str = "Dados inválidos"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class BadRequestError(AppError):
    """Raised when the id or the body cannot be parsed."""

    def __init__(self, message: str, details: list[str] | None = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class MovieNotFoundError(AppError):
    """Raised when no row matches the requested id."""

    def __init__(self, movie_id: int):
        self.movie_id = movie_id
        super().__init__(f"Filme com ID {movie_id} não encontrado", status.HTTP_404_NOT_FOUND)


class StorageError(AppError):
    """
    Raised when a query or the connection fails.

    The message carries the internal detail for the server log; clients only
    ever see ``INTERNAL_ERROR_MESSAGE``.
    """

    def __init__(self, message: str):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @property
    def public_message(self) -> str:
        return INTERNAL_ERROR_MESSAGE


class DeleteFailedError(StorageError):
    """Raised when a delete affected no rows after the existence check passed."""

    def __init__(self, movie_id: int):
        self.movie_id = movie_id
        super().__init__(f"filme com ID {movie_id} não foi deletado")
