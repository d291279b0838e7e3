# backend/main.py
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

load_dotenv()

from config import settings
from storage.factory import get_storage

# Routers
from routes.auth import router as auth_router
from routes.users import router as users_router
from routes.projects import router as projects_router
from routes.achievements import router as achievements_router
from routes.tools import router as tools_router
from routes.comments import router as comments_router
from routes.likes import router as likes_router
from routes.share import router as share_router
from routes.admin import router as admin_router
from routes.notifications import router as notifications_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Build the store (and seed the admin) before the first request
get_storage()

app = FastAPI(title="Portfolio API", version="1.0.0")

# Uploads - make sure the directory exists before mounting it
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# CORS Configuration
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.FRONTEND_URL not in origins:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": "Invalid request data"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Router registration
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(projects_router)
app.include_router(achievements_router)
app.include_router(tools_router)
app.include_router(comments_router)
app.include_router(likes_router)
app.include_router(share_router)
app.include_router(admin_router)
app.include_router(notifications_router)


@app.get("/")
def read_root():
    return {"message": "Portfolio API is running"}
