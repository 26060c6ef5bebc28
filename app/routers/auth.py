import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.schemas.user import UserCreate, UserLogin, TokenOut
from app.schemas.task import Message
from app.models.user import User
from app.utils.auth import hash_password, verify_password, create_token
from app.database import get_db
from app.errors import AuthError, ConflictError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

@router.post("/register", response_model=Message, response_model_exclude_none=True, status_code=201)
def register(user: UserCreate, db: Session = Depends(get_db)):
    # exact match; SQLite compares TEXT case-sensitively
    exists = db.query(User).filter(User.email == user.email).first()
    if exists:
        raise ConflictError("Email already exists")

    try:
        hashed = hash_password(user.password)
    except ValueError as e:
        # map hashing/validation errors to a 400 so client gets a clear message
        raise ValidationError(str(e))

    new_user = User(email=user.email, password=hashed)
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration of the same email
        db.rollback()
        raise ConflictError("Email already exists")
    logger.info("registered user id=%s", new_user.id)
    return {"message": "User registered successfully"}

@router.post("/login", response_model=TokenOut)
def login(user: UserLogin, db: Session = Depends(get_db)):
    db_user = db.query(User).filter(User.email == user.email).first()
    if not db_user or not verify_password(user.password, db_user.password):
        logger.info("failed login attempt")
        raise AuthError("Invalid credentials")

    token = create_token(db_user.id, db_user.email)
    return {"token": token, "email": db_user.email}
