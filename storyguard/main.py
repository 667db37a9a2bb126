import logging
from fastapi import FastAPI
from storyguard import __version__
from storyguard.config import get_settings
from storyguard.api.routes import publish, scrub

settings = get_settings()

# Configure application logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Set log level for storyguard modules
logger = logging.getLogger("storyguard")
logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

app = FastAPI(
    title=settings.app_name,
    description="Identity scrubbing and publish-safety validation for customer stories",
    version=__version__,
)

# Include routers
app.include_router(scrub.router, prefix="/api/scrub", tags=["Scrubbing"])
app.include_router(publish.router, prefix="/api/publish", tags=["Publish"])


@app.get("/")
async def root():
    return {
        "message": "Welcome to Storyguard - publish-safe customer stories",
        "version": __version__,
        "endpoints": {
            "scrub": "/api/scrub",
            "publish": "/api/publish",
            "health": "/health",
            "docs": "/docs",
            "redoc": "/redoc",
        },
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.app_name}
