"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from deardiary.api.routes import auth, diary

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(diary.router)
