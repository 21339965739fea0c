from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.user import UserOut, TokenOut
from app.utils.auth import create_access_token, get_current_user
from app.utils.hashing import verify_password

import logging
logger = logging.getLogger("app.auth")


router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=TokenOut)
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.username == form_data.username).first()
    if not user or not verify_password(form_data.password, user.password_hash):
        logger.info("login rejected username=%s", form_data.username)
        raise HTTPException(status_code=403, detail="Invalid credentials")

    token = create_access_token({"sub": user.username, "role": user.role})
    return TokenOut(access_token=token)


@router.get("/me", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user
