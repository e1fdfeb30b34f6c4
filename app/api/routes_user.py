import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.crud import user as crud_user
from app.db.deps import get_db, get_current_user
from app.schemas.schemas import LoginOut, ProfileOut, TokenUser, UserLogin, UserOut

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/profile", response_model=ProfileOut)
def read_profile(current_user: TokenUser = Depends(get_current_user)):
    return {"message": "✅ Authenticated", "user": current_user.claims}


@router.post("/login", response_model=LoginOut)
def login(
    data: UserLogin,
    db: Session = Depends(get_db),
    current_user: TokenUser = Depends(get_current_user),
):
    logger.info(f"Received user info - UID: {data.uid}, Email: {data.email}, Name: {data.name or '(none)'}")
    try:
        user, created = crud_user.upsert_user(db, uid=data.uid, email=data.email, name=data.name)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to save user")
        raise HTTPException(status_code=500, detail="Database error")

    return {
        "message": "User created" if created else "User updated",
        "user": UserOut.model_validate(user),
    }
