import logging
from fastapi import FastAPI
from linkpage.core.config import settings
from linkpage.core.database import engine, Base
from linkpage.routers import health, pages, platforms

logging.basicConfig(level=settings.LOG_LEVEL)

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="linkpage API",
    version="0.1.0"
)

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(pages.router)
app.include_router(platforms.router)
