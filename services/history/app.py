from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db, init_database
from models.api import APIResponse
from models.database.user import User
from models.history import HistoryCreateRequest, HistoryCreateResponse, HistoryDeleteRequest, HistoryPage
from services.auth import get_current_user
from services.auth import router as auth_router
from services.history.service import DEFAULT_PAGE_SIZE, HistoryService
from shared.exception_handlers import register_exception_handlers
from shared.utils import config, setup_logging

logger = setup_logging("history-service")

history_service = HistoryService()


def get_history_service() -> HistoryService:
    return history_service


router = APIRouter()


@router.post("/history", response_model=HistoryCreateResponse, status_code=201)
async def save_history(
    payload: HistoryCreateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: HistoryService = Depends(get_history_service),
):
    try:
        entry = service.save(db, current_user.id, payload)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error saving history: {e!s}")
        raise HTTPException(status_code=500, detail="Error saving history") from e
    return HistoryCreateResponse(message="History saved successfully", id=entry.id)


@router.get("/history", response_model=HistoryPage)
async def list_history(
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: HistoryService = Depends(get_history_service),
):
    try:
        return service.list_page(db, current_user.id, page=page, limit=limit)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error fetching history: {e!s}")
        raise HTTPException(status_code=500, detail="Error fetching history") from e


@router.delete("/history", response_model=APIResponse)
async def delete_history(
    payload: HistoryDeleteRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: HistoryService = Depends(get_history_service),
):
    if payload.id is None:
        raise HTTPException(status_code=400, detail="Missing ID")

    try:
        deleted = service.delete(db, current_user.id, payload.id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting history: {e!s}")
        raise HTTPException(status_code=500, detail="Error deleting history") from e

    if not deleted:
        raise HTTPException(status_code=404, detail="Item not found or unauthorized")
    return APIResponse(message="History item deleted successfully")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_database()
    yield


app = FastAPI(
    title="Grammar History Service",
    description="Saved grammar check results, kept for a limited time",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(router, prefix="/api")
app.include_router(auth_router, prefix="/api/auth")


@app.get("/health")
async def health_check():
    return APIResponse(message="History Service is healthy")
