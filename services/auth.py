from datetime import timedelta

import bcrypt
from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from jose import JWTError, jwt
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy.orm import Session

from database import get_db
from models.database.user import User as DBUser
from services.user_directory import get_user_by_email, upsert_user
from shared.utils import config, setup_logging, utcnow

logger = setup_logging("auth")

ALGORITHM = "HS256"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: str | None = None
    image: str | None = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class UserProfile(BaseModel):
    id: int
    email: str
    name: str | None = None
    image: str | None = None
    checks_performed: int


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a password against a bcrypt hash."""
    if not hashed_password:
        return False
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def authenticate_user(db: Session, email: str, password: str) -> DBUser | None:
    """Authenticate user credentials."""
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def _expire_minutes() -> int:
    return int(config.get("access_token_expire_minutes", 1440))


def create_access_token(data: dict[str, str], expires_minutes: int | None = None) -> str:
    """Create JWT access token."""
    payload: dict = dict(data)
    payload["exp"] = utcnow() + timedelta(minutes=expires_minutes or _expire_minutes())
    return jwt.encode(payload, config.get("secret_key"), algorithm=ALGORITHM)


def _token_response(user: DBUser) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token({"sub": user.email}),
        expires_in=_expire_minutes() * 60,
    )


async def get_current_user(
    token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> DBUser:
    """Resolve the bearer token to a user; every protected route depends on this."""
    try:
        payload = jwt.decode(token, config.get("secret_key"), algorithms=[ALGORITHM])
        email = payload.get("sub")
        if not isinstance(email, str):
            raise HTTPException(status_code=401, detail="Invalid token")
    except JWTError as e:
        raise HTTPException(status_code=401, detail="Invalid token") from e
    user = get_user_by_email(db, email)
    if user is None:
        raise HTTPException(status_code=401, detail="User not found")
    return user


router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(register_request: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account and sign it in."""
    if get_user_by_email(db, register_request.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    user = upsert_user(
        db,
        register_request.email,
        name=register_request.name,
        image=register_request.image,
        hashed_password=hash_password(register_request.password),
    )
    logger.info(f"Registered new user: {user.email}")
    return _token_response(user)


@router.post("/token", response_model=TokenResponse)
async def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """Authenticate with email and password and return a JWT access token."""
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(status_code=400, detail="Incorrect email or password")
    user = upsert_user(db, user.email)
    return _token_response(user)


@router.get("/me", response_model=UserProfile)
async def read_users_me(current_user: DBUser = Depends(get_current_user)):
    """Get current authenticated user profile."""
    return UserProfile(
        id=current_user.id,
        email=current_user.email,
        name=current_user.name,
        image=current_user.image,
        checks_performed=current_user.checks_performed,
    )
