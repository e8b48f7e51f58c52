import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from starlette.middleware.base import BaseHTTPMiddleware
from app.config import settings
from app.database import engine, Base, SessionLocal
from app.handlers import register_exception_handlers
from app.repositories import user as user_repository
from app.routes import auth, books, feedbacks
from app.services.account import DEFAULT_ROLE
from app.services.email import email_service

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log incoming requests for debugging."""
    async def dispatch(self, request: Request, call_next):
        auth_header = request.headers.get("Authorization")
        client_ip = request.client.host if request.client else "unknown"
        logger.info(f"{request.method} {request.url.path} - IP: {client_ip} - Auth: {'Present' if auth_header else 'Missing'}")
        if auth_header:
            # Never log the full token
            logger.debug(f"Token preview: {auth_header[:20]}...")

        response = await call_next(request)
        return response

Base.metadata.create_all(bind=engine)


def seed_roles() -> None:
    db = SessionLocal()
    try:
        user_repository.ensure_role(db, DEFAULT_ROLE)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Seed the default role on startup, stop the mail workers on shutdown."""
    logger.info(f"Seeding role {DEFAULT_ROLE}...")
    seed_roles()

    yield

    logger.info("Stopping mail workers...")
    email_service.shutdown()


app = FastAPI(
    title="Book Social Network API",
    description="Backend API for sharing, borrowing and rating books",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["Origin", "Content-Type", "Accept", "Authorization"],
)

# Logging middleware (last, to log everything)
app.add_middleware(LoggingMiddleware)

register_exception_handlers(app)

# Include routers
app.include_router(auth.router)
app.include_router(books.router)
app.include_router(feedbacks.router)

@app.get("/")
async def root():
    return {"message": "Book Social Network API", "version": "1.0.0"}

@app.get("/api/health")
async def health_check():
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=True
    )
