from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy import text
from app.core.config import settings
from app.core.exceptions import NotesAPIError
from app.core.logging_config import logger
from app.database import Store, get_store
from app.routers import auth, note, tenant
from app.services.seed import seed_demo_data

ENDPOINTS = [
    "GET /health",
    "POST /auth/login",
    "GET /notes",
    "POST /notes",
    "GET /notes/{note_id}",
    "PUT /notes/{note_id}",
    "DELETE /notes/{note_id}",
    "POST /tenants/{slug}/upgrade",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fresh volatile store per process start
    store = Store()
    seed_demo_data(store)
    app.state.store = store
    logger.info("Notes API started")
    yield
    store.dispose()
    logger.info("Notes API stopped")


app = FastAPI(
    title="Multi-tenant Notes API",
    version="1.0.0",
    redirect_slashes=False,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,  # Bearer tokens only, no cookies
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)

# Include routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(note.router, prefix="/notes", tags=["Notes"])
app.include_router(tenant.router, prefix="/tenants", tags=["Tenants"])


@app.exception_handler(NotesAPIError)
async def notes_api_error_handler(request: Request, exc: NotesAPIError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid input data", "error": "VALIDATION_ERROR", "details": details}
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "detail": f"Endpoint {request.method} {request.url.path} not found",
                "error": "ENDPOINT_NOT_FOUND",
                "available_endpoints": ENDPOINTS,
            }
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred", "error": "INTERNAL_SERVER_ERROR"}
    )


@app.get("/")
def index():
    return {
        "status": "ok",
        "message": "Multi-tenant Notes API",
        "endpoints": ENDPOINTS,
    }


@app.get("/health")
def health_check(store: Store = Depends(get_store)):
    try:
        with store.transaction() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy"
        )
