import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware

from taskboard.config import settings
from taskboard.database import init_db
from taskboard.errors import register_exception_handlers
from taskboard.routers.auth import router as auth_router
from taskboard.routers.projects import router as projects_router
from taskboard.routers.tasks import router as tasks_router
from taskboard.routers.users import router as users_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    # create_all is a no-op for tables that already exist, so every worker may run it
    await init_db()
    print(f"[STARTUP] [PROCESS {os.getpid()}] Document store ready, serving API under {settings.API_PREFIX}")
    yield


app = FastAPI(
    lifespan=lifespan,
    title="Taskboard API",
    description="Projects and three-column task boards for multiple users",
    version="1.0.0",
)

# Enable CORS for the frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

register_exception_handlers(app)

app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(projects_router, prefix=settings.API_PREFIX)
app.include_router(tasks_router, prefix=settings.API_PREFIX)
app.include_router(users_router, prefix=settings.API_PREFIX)

@app.get("/")
def root():
    return {"message": "Taskboard API running"}

@app.get("/health", response_class=PlainTextResponse)
def health():
    return "OK"
