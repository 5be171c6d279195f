from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import uvicorn

from marketplace.core.config import settings
from marketplace.core.database import create_db_and_tables, close_db
from marketplace.core.logging import setup_logging
from marketplace.core.messages import get_message
from marketplace.middleware.logging_middleware import LoggingMiddleware
from marketplace.controllers import product_controller, user_controller, catalog_controller
from marketplace.sao.storage_sao import storage_sao

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup", environment=settings.environment)
    try:
        await create_db_and_tables()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Application shutdown")
    try:
        await close_db()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error("Error during shutdown", error=str(e))


app = FastAPI(
    title="Marketplace Catalog API",
    description="Products, users and developers for the template marketplace",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "local" else None,
    redoc_url="/redoc" if settings.environment == "local" else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.request_logging:
    app.add_middleware(LoggingMiddleware)

app.include_router(product_controller.router, prefix=settings.api_prefix)
app.include_router(user_controller.router, prefix=settings.api_prefix)
app.include_router(catalog_controller.router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {
        "message": "Marketplace Catalog API is running",
        "version": "1.0.0",
        "environment": settings.environment,
        "docs_url": "/docs" if settings.environment == "local" else "Documentation disabled in production"
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "environment": settings.environment,
        "public_catalog_reads": settings.public_catalog_reads,
        "object_storage_enabled": storage_sao.is_enabled(),
    }


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    logger.warning(
        "HTTP Exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "message": exc.detail,
            "success": False,
            "status_code": exc.status_code
        },
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    logger.warning(
        "Request validation failed",
        errors=str(exc.errors()),
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(
        status_code=400,
        content={
            "message": get_message("invalid_request"),
            "success": False,
            "status_code": 400,
            "error": [
                {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
                for error in exc.errors()
            ],
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    logger.error(
        "Unhandled Exception",
        error=str(exc),
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(
        status_code=500,
        content={
            "message": get_message("internal_error"),
            "success": False,
            "status_code": 500,
            "error": type(exc).__name__,
        }
    )


if __name__ == "__main__":
    uvicorn.run(
        "marketplace.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "local",
        log_config=None
    )
