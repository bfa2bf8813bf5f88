import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import create_tables
from app.routers.auth import router as auth_router
from app.routers.usuarios import router as usuarios_router
from app.utils.exceptions import register_exception_handlers
from app.utils.response import success_response

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    logger.info("Connected to database %s", settings.database_url)
    logger.info("Server running at http://%s:%d", settings.host, settings.port)
    yield


app = FastAPI(
    title="Pastelería Colibrí API",
    description="Backend de gestión de usuarios de la Pastelería Colibrí",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(usuarios_router)


@app.get("/health")
async def health_check():
    return success_response(data={"service": "pasteleria-colibri-api", "version": "0.1.0"})


def run() -> None:
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    run()
