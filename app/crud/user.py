from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import models


def get_user_by_uid(db: Session, uid: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.uid == uid).first()


def _update_user(db: Session, user: models.User, email: str, name: Optional[str]) -> models.User:
    user.email = email
    user.name = name
    db.commit()
    db.refresh(user)
    return user


# Insert or update by primary key, returns (user, created)
def upsert_user(db: Session, uid: str, email: str, name: Optional[str] = None) -> Tuple[models.User, bool]:
    user = get_user_by_uid(db, uid)
    if user is not None:
        return _update_user(db, user, email, name), False

    user = models.User(uid=uid, email=email, name=name)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent login inserted the same uid first
        db.rollback()
        user = get_user_by_uid(db, uid)
        if user is None:
            raise
        return _update_user(db, user, email, name), False

    db.refresh(user)
    return user, True
