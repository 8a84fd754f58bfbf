from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from travel_agency import __version__
from travel_agency.api import routes_commands, routes_health
from travel_agency.core.config import settings
from travel_agency.core.logging import configure_logging


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name, version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(routes_health.router, tags=["health"])
    app.include_router(routes_commands.router, prefix="/commands", tags=["commands"])

    app.state.settings = settings
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
