import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from prometheus_client import make_asgi_app

from skillsage.api.errors import setup_error_handlers
from skillsage.api.routes import router as api_router
from skillsage.auth.identity import IdentityProvider, build_identity_provider
from skillsage.auth.verification import IdentityVerifier
from skillsage.core.config import Settings, settings as default_settings
from skillsage.core.logging import setup_logging
from skillsage.services.ai_gateway import AIGateway, build_ai_gateway
from skillsage.storage import Storage, build_storage
from skillsage.storage.seed import seed_courses


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: Settings = app.state.settings
    logger.info(f"Starting {config.PROJECT_NAME} {config.VERSION} ({config.ENVIRONMENT})")
    await app.state.storage.initialize()
    if config.SEED_COURSES:
        await seed_courses(app.state.storage)

    yield

    logger.info("Shutting down the application...")
    await app.state.ai_gateway.close()
    await app.state.storage.close()


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[Storage] = None,
    identity_provider: Optional[IdentityProvider] = None,
    ai_gateway: Optional[AIGateway] = None,
) -> FastAPI:
    """Build the application; collaborators not passed in are built from settings."""
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    storage = storage or build_storage(settings)
    if identity_provider is None:
        identity_provider = build_identity_provider(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="SkillSage career platform API",
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage = storage
    app.state.verifier = IdentityVerifier.from_settings(settings, identity_provider, storage)
    app.state.ai_gateway = ai_gateway or build_ai_gateway(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
        return response

    setup_error_handlers(app)

    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "service": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "storage": app.state.storage.name,
            "identityConfigured": app.state.verifier.provider is not None,
            "aiConfigured": app.state.ai_gateway.configured,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("skillsage.main:app", host="0.0.0.0", port=8000, reload=default_settings.is_development)
