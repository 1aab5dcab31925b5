import logging
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# IMPORT ROUTERS
from app.routers.health import router as health_router
from app.routers.authority_scoring import router as authority_scoring_router
from app.config import get_settings
load_dotenv()

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# SWAGGER UI — tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Authority Scoring"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router)             # Health
app.include_router(authority_scoring_router)  # Authority Scoring


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
