import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from waitlist_api.api.api import api_router
from waitlist_api.core.config import settings
from waitlist_api.storage import WaitlistStore, create_store
from waitlist_api.utils.audit import configure_audit_logger

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

api_description = """
## Waitlist API

Backs the landing page signup form.

- `POST /api/waitlist` - Join the waitlist with an email (optional name, message, source)
- `GET /api/waitlist/stats` - Total signups and founders' spots remaining
"""


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    configure_audit_logger()


def create_app(store: Optional[WaitlistStore] = None) -> FastAPI:
    """Build the application around ``store``.

    When no store is given one is created from settings. The store lives on
    ``app.state`` for the lifetime of the app and is handed to request
    handlers through ``get_store``.
    """
    app = FastAPI(
        title="Waitlist API",
        description=api_description,
        version="1.0.0",
        debug=settings.DEBUG,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # GZip compression for large JSON responses
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # Set up CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store if store is not None else create_store(settings)

    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    def init_store_on_startup():
        app.state.store.init_schema()
        logger.info("Waitlist store ready (%s)", type(app.state.store).__name__)

    @app.get("/")
    async def root():
        return {"message": "Waitlist API is running"}

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


configure_logging()
app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
