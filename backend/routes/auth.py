# backend/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, Response, status, Request
from sqlalchemy.orm import Session

from config import settings
from utils.tokenJWT import COOKIE_NAME, create_access_token, get_current_user
from utils.audit import write_log
from models.users import User
from schemas import user as schemas
import services.users as users_service
from database import get_db

router = APIRouter(tags=["Auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        COOKIE_NAME,
        token,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


# Register a new user; the first account becomes admin
@router.post("/register", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
def register(user: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    new_user = users_service.create_user(db, user.username, user.password, user.secret_code)

    # Log successful registration event
    write_log(
        db,
        user_id=new_user.id,
        action="REGISTER",
        resource="auth",
        status="SUCCESS",
        ip=request.client.host if request.client else None,
        meta={"username": new_user.username, "is_admin": new_user.is_admin},
    )
    return new_user


# Authenticate user, issue JWT token and store it in the session cookie
@router.post("/login", response_model=schemas.Token)
def login(payload: schemas.UserLogin, request: Request, response: Response, db: Session = Depends(get_db)):
    db_user = users_service.authenticate(db, payload.username, payload.password)
    ip = request.client.host if request.client else None

    # Validate credentials and log failure on error
    if not db_user:
        write_log(db, user_id=None, action="LOGIN", resource="auth",
                  status="FAIL", ip=ip, meta={"username": payload.username})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    access_token = create_access_token(data={"sub": db_user.username, "admin": db_user.is_admin})
    _set_session_cookie(response, access_token)

    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              status="SUCCESS", ip=ip, meta={"username": db_user.username})

    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(COOKIE_NAME)
    return {"message": "Logged out"}


# Retrieve current authenticated user details
@router.get("/user", response_model=schemas.UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
