from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import routes_catalog, routes_health, routes_packages, routes_sessions
from app.core.config import settings
from app.core.logging import configure_logging
from app.storage.catalog import MasterCatalog
from app.storage.repository import InMemoryRepository


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name, version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(routes_health.router, tags=["health"])
    app.include_router(routes_sessions.router, prefix="/sessions", tags=["authoring"])
    app.include_router(routes_catalog.router, prefix="/catalog", tags=["catalog"])
    app.include_router(routes_packages.router, prefix="/packages", tags=["packages"])

    # Shared state for request dependencies
    app.state.repository = InMemoryRepository()
    app.state.catalog = MasterCatalog.seeded()
    app.state.settings = settings
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
