import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookstore import __version__
from bookstore.config import settings
from bookstore.database import create_db_and_tables
from bookstore.routes import auth, books, orders, users
from bookstore.utils.dates import utc_now

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run DB creation ONLY in local
    if settings.env == "local":
        create_db_and_tables()
    logger.info(f"Bookstore API {__version__} started ({settings.env})")
    yield


app = FastAPI(
    title="Book Store API",
    version=__version__,
    description="Bookstore catalog and ordering API",
    docs_url="/api-docs",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Validation failed for {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation failed",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(books.router, prefix="/api/books", tags=["Books"])
app.include_router(orders.router, prefix="/api/orders", tags=["Orders"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])


@app.get("/api/health", tags=["Health"])
def health():
    return {
        "status": "OK",
        "message": "Book Store API is running",
        "timestamp": utc_now().isoformat(),
        "version": __version__,
        "documentation": "/api-docs",
    }


@app.get("/api", tags=["Health"])
def api_info():
    return {
        "name": "Book Store API",
        "version": __version__,
        "description": "REST API with repository, service and DTO layers",
        "documentation": "/api-docs",
        "endpoints": {
            "authentication": "/api/auth",
            "books": "/api/books",
            "orders": "/api/orders",
            "users": "/api/users",
        },
    }
