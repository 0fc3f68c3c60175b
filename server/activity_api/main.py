"""Step Activity API - FastAPI application entry point."""
import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from activity_engine import ActivityService

from .config import get_settings
from .database import get_activity_service
from .routes import goals, metrics, summary

settings = get_settings()

app = FastAPI(
    title="Step Activity API",
    description="Ingests step samples and serves daily progress, streaks, insights and forecasts",
    version="1.0.0",
)

# Configure CORS for the dashboard
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

# Include routers
app.include_router(metrics.router)
app.include_router(goals.router)
app.include_router(summary.router)


@app.get("/health")
async def health_check(service: ActivityService = Depends(get_activity_service)):
    """Health check endpoint for the API."""
    return {"status": "ok", "service": "activity-api", "count": service.sample_count()}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "server.activity_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
