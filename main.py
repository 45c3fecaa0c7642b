# main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import settings
from app.api.routes import competitions, achievements, ratings, admin, cron
from app.core.exceptions import SnapScapeError
from app.core.logging_middleware import log_requests
from app.core.logger import logger
# Register every model with the mapper before the first query
from app.models import user, competition, submission, rating, result, notification  # noqa: F401

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug
)

# ===== Request logging (first) =====
@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    return await log_requests(request, call_next)
# ===================================

@app.exception_handler(SnapScapeError)
async def snapscape_error_handler(request: Request, exc: SnapScapeError):
    """Domain errors that escaped a route"""
    logger.error(f"Unhandled {type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=500, content=exc.to_dict())

# CORS
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "https://snapscape.app",
    "https://www.snapscape.app",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(competitions.router)
app.include_router(achievements.router)
app.include_router(ratings.router)
app.include_router(admin.router)
app.include_router(cron.router)

@app.on_event("startup")
async def startup_event():
    logger.info("SnapScape API starting")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("SnapScape API shutting down")

@app.get("/health")
def health_check():
    """Health check"""
    return {
        "status": "healthy",
        "service": settings.app_name
    }
