# app/main.py - application entry point
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import models  # noqa: F401 - register every table on Base.metadata
from app.api import (
    activities,
    auth,
    favorite,
    message,
    notification,
    profile,
    review,
    skill,
    skill_request,
    users,
)
from app.api.errors import register_exception_handlers
from app.config import settings
from app.database import Base, engine
from app.middleware.gateway import GatewayMiddleware

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting SkillSwap API (%s)", settings.APP_ENV)
    Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()


# Initialize FastAPI app
app = FastAPI(title="SkillSwap API", version="0.2.0", lifespan=lifespan)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GatewayMiddleware)

register_exception_handlers(app)

# API routers
app.include_router(auth.router)               # /api/auth/*
app.include_router(users.profile_router)      # /api/user/profile
app.include_router(users.router)              # /api/users/*
app.include_router(skill.router)              # /api/skills/*
app.include_router(favorite.router)           # /api/favorites/*
app.include_router(message.router)            # /api/messages/*
app.include_router(notification.router)       # /api/notifications/*
app.include_router(review.router)             # /api/reviews
app.include_router(skill_request.router)      # /api/skill-requests/*
app.include_router(activities.router)         # /api/activities/*
app.include_router(profile.router)            # /api/profile/*


@app.get("/")
def root():
    return {"message": "SkillSwap API", "docs": "/docs"}


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "message": "SkillSwap API is running",
        "version": "0.2.0",
    }
