"""
FastAPI entrypoint for the Dear Diary backend application.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from deardiary.core.config import settings
from deardiary.core.security import get_token_codec
from deardiary.core.utils import configure_logging
from deardiary.db.session import init_db
from deardiary.api.router import api_router
from deardiary.api.routes import pages
from deardiary.api.middleware.error_handler import setup_exception_handlers
from deardiary.api.middleware.route_guard import RouteGuardMiddleware

configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title="Dear Diary API",
    description="Backend API for a private journal with AI replies",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Route guard runs before any page or API handler
app.add_middleware(
    RouteGuardMiddleware,
    codec=get_token_codec(),
    cookie_name=settings.SESSION_COOKIE_NAME,
)

setup_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")
app.include_router(pages.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
