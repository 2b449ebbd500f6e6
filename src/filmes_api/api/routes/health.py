"""API information and health check endpoints."""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter

from filmes_api import __version__
from filmes_api.schemas import HealthResponse

router = APIRouter()

SERVICE_NAME = "API de Filmes"


@router.get("/", tags=["health"])
async def api_info() -> dict[str, Any]:
    """
    Describe the API.

    Returns:
        Welcome message, version, available endpoints and an example payload
    """
    return {
        "message": "Bem-vindo à API de Filmes!",
        "version": __version__,
        "resources": {
            "movies": [
                "GET /movies - Lista todos os filmes",
                "POST /movies - Cria novo filme",
                "GET /movies/{id} - Busca filme por ID",
                "PUT /movies/{id} - Atualiza filme",
                "DELETE /movies/{id} - Remove filme",
            ],
            "system": [
                "GET /health - Status do sistema",
            ],
        },
        "example": {
            "titulo": "Nome do Filme",
            "descricao": "Descrição do filme",
            "ano_lancamento": 2024,
            "duracao_minutos": 120,
            "genero": "Drama",
            "diretor": "Nome do Diretor",
            "avaliacao": 8.5,
        },
    }


@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns:
        Static status metadata; the database is not queried
    """
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        service=SERVICE_NAME,
        version=__version__,
    )
