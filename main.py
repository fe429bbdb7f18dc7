import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.database import create_store
from core.errors import register_exception_handlers
from core.settings import Settings, get_settings
from modules.catalog.router import router as catalog_router
from modules.catalog.service import RecordStore
from modules.reports.router import router as reports_router


def create_app(settings: Optional[Settings] = None, store: Optional[RecordStore] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title=settings.app_name)
    app.state.store = store or create_store(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Registered before the catalog router so "/health" is not read as a resource name
    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(reports_router)
    app.include_router(catalog_router)

    return app


app = create_app()
