import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from archon.api.main import api_router
from archon.api.routes import utils
from archon.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="[%(asctime)s] %(levelname)s - %(name)s - %(message)s",
)

logger = logging.getLogger(__name__)


def _error_path(loc: tuple) -> str:
    parts = loc[1:] if loc and loc[0] == "body" else loc
    return ".".join(str(part) for part in parts)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"path": _error_path(tuple(error.get("loc", ()))), "message": error.get("msg", "")}
        for error in exc.errors()
    ]
    logger.info("Rejected %s %s: %s", request.method, request.url.path, details)
    return JSONResponse(status_code=400, content={"error": "Validation error", "details": details})


def create_app() -> FastAPI:
    app = FastAPI(title="Archon Architecture Review API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(utils.router)
    app.include_router(api_router, prefix="/api")

    if not (settings.LLM_API_KEY or settings.GROQ_API_KEY):
        logger.warning("Neither LLM_API_KEY nor GROQ_API_KEY is set; review requests will fail")
    logger.info("Routers registered and FastAPI app ready (environment=%s)", settings.ENVIRONMENT)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("archon.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
