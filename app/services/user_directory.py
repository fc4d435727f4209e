"""
Email -> user id. First sign-in creates the account; later sign-ins return the
same id and leave name/avatar untouched (first write wins).
"""
import uuid
import logging
from datetime import datetime
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.models.user import User

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def resolve_or_create_user(
    db: Session,
    email: str,
    name: str | None = None,
    avatar_url: str | None = None,
) -> str:
    """
    Insert-if-absent on the unique email column. A concurrent sign-in that wins
    the insert makes ours fail with IntegrityError; we then return the winner's id.
    """
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        return existing.id

    user = User(
        id=str(uuid.uuid4()),
        email=email,
        name=name,
        avatar_url=avatar_url,
        created_at=datetime.utcnow(),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        winner = db.query(User).filter(User.email == email).first()
        if not winner:
            raise
        logger.info("Concurrent sign-in for existing account %s", winner.id)
        return winner.id

    logger.info("Created user %s", user.id)
    return user.id
