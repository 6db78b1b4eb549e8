import logging
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from ninebox.config import settings
from ninebox.core.dependencies import get_document_store
from ninebox.core.errors import (
    STORE_EXCEPTIONS,
    store_unavailable_handler,
    validation_exception_handler,
)

# IMPORT ROUTERS
from ninebox.routers.health import router as health_router
from ninebox.routers.auth import router as auth_router
from ninebox.routers.companies import router as companies_router
from ninebox.routers.users import router as users_router
from ninebox.routers.employees import router as employees_router
from ninebox.routers.questions import router as questions_router
from ninebox.routers.settings import router as settings_router
from ninebox.routers.scoring import router as scoring_router
from ninebox.routers.assessments import router as assessments_router
from ninebox.routers.results import router as results_router
from ninebox.routers.grid import router as grid_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# SWAGGER UI - tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Auth"},
    {"name": "Companies"},
    {"name": "Users"},
    {"name": "Employees"},
    {"name": "Questions"},
    {"name": "Settings"},
    {"name": "Scoring"},
    {"name": "Assessments"},
    {"name": "Results"},
    {"name": "Grid"},
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

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)
for exc_class in STORE_EXCEPTIONS:
    app.add_exception_handler(exc_class, store_unavailable_handler)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router)       # Health
app.include_router(auth_router)         # Auth
app.include_router(companies_router)    # Companies
app.include_router(users_router)        # Users
app.include_router(employees_router)    # Employees
app.include_router(questions_router)    # Questions
app.include_router(settings_router)     # Settings
app.include_router(scoring_router)      # Scoring
app.include_router(assessments_router)  # Assessments
app.include_router(results_router)      # Results
app.include_router(grid_router)         # Grid


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


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting {settings.APP_NAME} ({settings.APP_ENV})...")
    store = get_document_store()
    if store.is_healthy():
        logger.info(f"Document store ready at {store.path}")
    else:
        logger.error(f"Document store at {store.path} is unreadable; requests will fail with 503")
    logger.info("Swagger UI available at: http://localhost:8000/docs")


# SHUTDOWN EVENT
@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.APP_NAME}...")


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "ninebox.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
