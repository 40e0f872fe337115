# backend/app/main.py

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import routers
from app.core.exception_handlers import register_exception_handlers
from app.core.logging_config import get_loggers
from app.core.middleware import MaxBodySizeMiddleware
from app.core.settings import get_settings
from app.db.mongodb import create_client
from app.db.seed_indexes import ensure_indexes

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- startup ---
    logger, _, _ = get_loggers()
    client = create_client(settings)
    db = client[settings.mongodb_db]
    await db.command("ping")
    await ensure_indexes(db)
    app.state.client = client
    app.state.db = db
    logger.info("Connected to MongoDB database %s", settings.mongodb_db)

    yield  # l'app tourne ici

    # --- shutdown ---
    client.close()
    logger.info("MongoDB client closed")


app = FastAPI(title="EcoTrack API", version=settings.api_version, lifespan=lifespan)

# Ordre des middlewares : le dernier ajouté s'exécute en premier.
app.add_middleware(
    MaxBodySizeMiddleware,
    max_body_size=settings.max_body_bytes,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

for r in routers:
    app.include_router(r)
