import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dialogue_api.core.database import get_client
from dialogue_api.core.settings import settings
from dialogue_api.domains.admin.routes import router as admin_router
from dialogue_api.domains.auth.routes import router as session_router
from dialogue_api.domains.dialogues.routes import router as dialogues_router
from dialogue_api.domains.roles.routes import router as roles_router
from dialogue_api.domains.roles.routes import user_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup
    prisma = get_client()
    await prisma.connect()
    yield
    # Shutdown
    await prisma.disconnect()


app = FastAPI(
    title="Dialogue API",
    description="API for voice dialogue creation and role-based access control",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL] if settings.FRONTEND_URL else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(session_router, prefix="/api/v1")
app.include_router(roles_router, prefix="/api/v1")
app.include_router(user_router, prefix="/api/v1")
app.include_router(dialogues_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": "Dialogue API is running"}


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}
