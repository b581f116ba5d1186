from typing import Optional

from fastapi import FastAPI
from sqlalchemy import Engine

from user_directory.core.settings import Settings, settings as default_settings
from user_directory.db.session import create_db_engine, create_session_factory
from user_directory.routers.users import router as users_router
from user_directory.startup import register_startup


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or default_settings
    engine = engine or create_db_engine(settings.database_url)

    app = FastAPI(title=settings.app_name, debug=settings.debug)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    register_startup(app)

    app.include_router(users_router, tags=["user_v1"])

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app
