
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_sync.core.config import get_settings
from user_sync.routers import auth, health, users


settings = get_settings()

app = FastAPI(title=settings.app_name, version=settings.app_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.resolved_cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(health.router)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Explicit health endpoint for readiness probes."""
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
    }
