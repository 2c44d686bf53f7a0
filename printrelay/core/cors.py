from typing import Iterable

from fastapi import FastAPI, Request, Response

ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOW_HEADERS = (
    "Origin, X-Requested-With, Content-Type, Accept, "
    "X-API-Key, X-Pairing-Token, Authorization"
)


def install_cors(app: FastAPI, allowed_origins: Iterable[str]):
    """
    Echo Access-Control-Allow-Origin only for listed origins. Preflights
    (any OPTIONS) are answered here with 200 and no body.
    """
    allowed = frozenset(allowed_origins)

    @app.middleware("http")
    async def cors_middleware(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)

        origin = request.headers.get("origin")
        if origin and origin in allowed:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
        response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
        response.headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
        return response
