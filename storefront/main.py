import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.core.config import settings
from storefront.api.v1.api import router as api_v1_router
from storefront.services.settings import ConfigurationStore
from storefront.services.settings.factory import create_store

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(store: ConfigurationStore | None = None) -> FastAPI:
    app = FastAPI(title="Storefront API", version="0.1.0")

    # set up CORS so the frontend can talk to us
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings_store = store or create_store()

    # mount our API routes
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.on_event("startup")
    def on_startup():
        # first boot persists the default rules
        app.state.settings_store.bootstrap()
        logger.info(f"Settings backend: {app.state.settings_store.backend.name}")

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.settings_store.close()

    @app.get("/health")
    def health():
        return {"status": "ok", "env": settings.APP_ENV}

    return app


app = create_app()
