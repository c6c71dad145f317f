"""
PlanP Backend — application entry point.
"""

from __future__ import annotations

import logging
import sys

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.health import router as health_router
from api.middleware import register_middleware
from api.users import router as users_router
from config.settings import config
from database.session import dispose_engine, init_db

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("httpcore", "httpx", "aiomysql", "sqlalchemy.engine"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        description="PlanP signup / login / duplicate-check API.",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.planp_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(users_router)
    app.include_router(health_router)

    @app.on_event("startup")
    async def on_startup():
        logger.info("Starting %s v%s (%s)", config.app_name, config.app_version, config.planp_env)
        await init_db()
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await dispose_engine()

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.planp_host,
        port=config.planp_port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
