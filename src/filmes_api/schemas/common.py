"""Pydantic schemas shared by every endpoint."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """
    Error body returned for every failed request.

    ``detalhes`` is left out of the JSON when there is nothing to add.
    """

    erro: str
    codigo: int
    detalhes: list[str] | None = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    service: str
    version: str
