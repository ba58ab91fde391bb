# main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.database import init_db
from app.routes.auth import router as auth_router
from app.routes.leaderboard import router as leaderboard_router
from app.routes.quiz import router as quiz_router
from app.routes.score import router as score_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create missing tables, never drop existing ones
    init_db()
    logger.info("✅ Database ready")
    yield


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,  # Frontend URL
    allow_credentials=True,
    allow_methods=["*"],  # Allows all methods (GET, POST, PUT, DELETE, etc.)
    allow_headers=["*"],  # Allows all headers
)


@app.get("/")
def read_root():
    return {"message": f"{settings.PROJECT_NAME} is running"}


app.include_router(auth_router)
app.include_router(quiz_router)
app.include_router(score_router)
app.include_router(leaderboard_router)
