from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from database import get_db, init_database
from models.api import APIResponse
from models.database.user import User
from models.grammar import GrammarCheckRequest, GrammarCheckResponse, StyleGuide
from models.enums import WritingStyle
from services.auth import get_current_user
from services.auth import router as auth_router
from services.grammar_check.prompts import get_style_guide
from services.grammar_check.service import GrammarCheckService
from services.user_directory import increment_checks
from shared.exception_handlers import register_exception_handlers
from shared.utils import config, setup_logging

logger = setup_logging("grammar-check-service")

grammar_service = GrammarCheckService(logger)


def get_grammar_service() -> GrammarCheckService:
    return grammar_service


router = APIRouter()


@router.post("/check-grammar", response_model=GrammarCheckResponse)
async def check_grammar(
    request: GrammarCheckRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: GrammarCheckService = Depends(get_grammar_service),
):
    result = await service.check_grammar(request)
    increment_checks(db, current_user.id)
    logger.info(
        f"Grammar check for user {current_user.id}: "
        f"{len(result.suggestions)} suggestions, language={result.detected_language.value}"
    )
    return result


@router.get("/check-grammar/styles", response_model=list[StyleGuide])
async def get_writing_styles(current_user: User = Depends(get_current_user)):
    return [StyleGuide(style=style, guide=get_style_guide(style)) for style in WritingStyle]


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_database()
    yield


app = FastAPI(
    title="Grammar Check Service",
    description="AI grammar and style suggestions for English and Indonesian text",
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
    return APIResponse(message="Grammar Check Service is healthy")


if __name__ == "__main__":
    try:
        import uvicorn
    except ImportError as e:
        raise RuntimeError("uvicorn must be installed to run this service.") from e
    uvicorn.run(app, host="0.0.0.0", port=8000)
