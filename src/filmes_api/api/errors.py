"""Exception handlers rendering every failure as an ``ErrorResponse``."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from filmes_api.exceptions import INTERNAL_ERROR_MESSAGE, AppError, BadRequestError
from filmes_api.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

HTTP_ERROR_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "Recurso não encontrado",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Método não permitido",
}


def error_response(
    message: str, status_code: int, details: list[str] | None = None
) -> JSONResponse:
    body = ErrorResponse(erro=message, codigo=status_code, detalhes=details or None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.message}",
            exc_info=exc,
        )
    return error_response(exc.public_message, exc.status_code, exc.details)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Map FastAPI parsing errors onto the API's 400 responses.

    A path error can only come from the movie id; everything else concerns
    the JSON body.
    """
    errors = exc.errors()

    if any(err["loc"] and err["loc"][0] == "path" for err in errors):
        error = BadRequestError("ID inválido", ["ID deve ser um número inteiro"])
    elif any(err["type"] == "json_invalid" for err in errors):
        error = BadRequestError("JSON inválido", ["Verifique a sintaxe do JSON"])
    else:
        details = []
        for err in errors:
            field = ".".join(str(part) for part in err["loc"][1:]) or "body"
            details.append(f"{field}: {err['msg']}")
        error = BadRequestError("JSON inválido", details)

    return await app_error_handler(request, error)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    message = HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
    response = error_response(message, exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for errors no other handler maps, e.g. a dropped DB socket."""
    logger.error(
        f"{request.method} {request.url.path} failed unexpectedly: {exc!r}",
        exc_info=exc,
    )
    return error_response(INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
