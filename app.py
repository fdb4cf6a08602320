"""
Grammar Checker Backend - Unified Application Entry Point
Mounts the grammar check, history and authentication routes under one FastAPI app
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from database import init_database
from services.auth import router as auth_router
from services.grammar_check.app import router as grammar_check_router
from services.history.app import router as history_router
from shared.exception_handlers import register_exception_handlers
from shared.utils import config, setup_logging

logger = setup_logging("grammar-checker-backend")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_database()
    yield


app = FastAPI(
    title="Grammar Checker Backend API",
    description="""
    Grammar and style suggestions powered by a hosted language model,
    with per-user history of saved checks.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Authentication",
            "description": "Sign-in and token management - mounted at /api/auth",
        },
        {
            "name": "Grammar Check",
            "description": "Grammar check pipeline - mounted at /api/check-grammar",
        },
        {
            "name": "History",
            "description": "Saved grammar checks - mounted at /api/history",
        },
        {
            "name": "Health",
            "description": "Service health and status endpoints",
        },
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
app.include_router(grammar_check_router, prefix="/api", tags=["Grammar Check"])
app.include_router(history_router, prefix="/api", tags=["History"])


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with service information and API navigation"""
    return {
        "service": "Grammar Checker Backend API",
        "version": "1.0.0",
        "endpoints": {
            "check_grammar": "/api/check-grammar",
            "writing_styles": "/api/check-grammar/styles",
            "history": "/api/history",
            "auth": {
                "register": "/api/auth/register",
                "token": "/api/auth/token",
                "me": "/api/auth/me",
            },
        },
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json",
        },
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for all services"""
    return {
        "status": "healthy",
        "services": {
            "api_gateway": "operational",
            "grammar_check": "operational",
            "history": "operational",
        },
    }


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting Grammar Checker Backend on http://0.0.0.0:8000")
    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
