import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import UserCreate, RefreshTokenRequest, UserLogin, TokenResponse, UserSchema
from ..auth import (
    issue_tokens,
    verify_refresh_token,
    verify_password,
    get_current_user,
    get_password_hash,
    role_for_email,
)
from ..services.audit import log_event

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])

# ============================================================================
# POST ENDPOINTS (Create/Login)
# ============================================================================

@router.post("/register", response_model=UserSchema)
def register_user(user: UserCreate, request: Request, db: Session = Depends(get_db)):
    """Register a new user"""
    if db.query(User).filter(User.username == user.username).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already registered")

    email = user.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    db_user = User(
        username=user.username,
        email=email,
        name=user.name,
        hashed_password=get_password_hash(user.password),
        role=role_for_email(email),
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    log_event(db, "user_signup", {"username": db_user.username, "email": email}, request.headers.get("user-agent"))
    return db_user

@router.post("/login", response_model=TokenResponse)
def login_user(user_data: UserLogin, request: Request, db: Session = Depends(get_db)):
    """Login with username and password"""
    user_agent = request.headers.get("user-agent")
    db_user = db.query(User).filter(User.username == user_data.username).first()

    if not db_user or not verify_password(user_data.password, db_user.hashed_password):
        reason = "no_user" if not db_user else "bad_password"
        logger.warning(f"Login failure for {user_data.username!r}: {reason}")
        log_event(db, "user_login_failure", {"username": user_data.username, "reason": reason}, user_agent)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not db_user.is_active:
        log_event(db, "user_login_failure", {"username": user_data.username, "reason": "blocked"}, user_agent)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Your account is blocked by admin")

    log_event(db, "user_login_success", {"username": db_user.username}, user_agent)
    return issue_tokens(db_user)

@router.post("/refresh", response_model=TokenResponse)
def refresh_token(request: RefreshTokenRequest, db: Session = Depends(get_db)):
    """Refresh access token using refresh token"""
    username = verify_refresh_token(request.refresh_token)

    db_user = db.query(User).filter(User.username == username).first()
    if not db_user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    if not db_user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Your account is blocked by admin")

    return issue_tokens(db_user)

# ============================================================================
# GET ENDPOINTS (Read)
# ============================================================================

@router.get("/me", response_model=UserSchema)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information"""
    return current_user
