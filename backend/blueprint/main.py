# backend/blueprint/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blueprint.config import get_settings
from blueprint.database import init_db
from blueprint.api.integrations import router as integrations_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    description="MSEL push/pull synchronization with Player, Cite, Gallery and Steamfitter",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(integrations_router, prefix="/api/v1")


@app.on_event("startup")
def create_tables():
    if settings.create_tables_on_startup:
        init_db()


@app.get("/health")
async def health_check():
    return {"status": "healthy", "app": settings.app_name}
