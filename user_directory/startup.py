import logging

from fastapi import FastAPI

from user_directory.db.session import Base, ping


logger = logging.getLogger(__name__)


def register_startup(app: FastAPI) -> None:
    @app.on_event("startup")
    def _open_database() -> None:
        engine = app.state.engine
        Base.metadata.create_all(bind=engine)
        ping(engine)
        logger.info("database ready at %s", engine.url.render_as_string(hide_password=True))

    @app.on_event("shutdown")
    def _close_database() -> None:
        app.state.engine.dispose()
        logger.info("database connection pool released")
