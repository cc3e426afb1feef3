import logging

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from core.config import settings
from core.db import Base, engine, get_db
import models  # noqa: F401
from routes.auth import router as auth_router
from routes.stores import router as stores_router
from routes.orders import router as orders_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


@app.middleware("http")
async def catch_unhandled_errors(request: Request, call_next):
    # Registered before CORS so error responses still carry the CORS headers
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("[%s %s] unhandled error", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": str(exc) or "Unknown error"})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
    expose_headers=["*"],
    max_age=3600,
)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
    }
    # Apply BearerAuth globally so docs/redoc offer the Authorize button
    openapi_schema["security"] = [{"BearerAuth": []}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": "Invalid request data"})


# Ensure tables exist (for dev/test; in prod use migrations)
Base.metadata.create_all(bind=engine)

app.include_router(auth_router)
app.include_router(stores_router)
app.include_router(orders_router)


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root():
    return "Hello World"


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint, verifies the database answers."""
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Health check failed: %s", e)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": "Database connection failed",
                "error": str(e),
            },
        )
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "message": "Database connection is working",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
    )
