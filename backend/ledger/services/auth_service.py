"""
Credential verification and user registration.
"""
import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from ledger.core.exceptions import AuthenticationError, ConflictError, ValidationError
from ledger.core.security import dummy_password_hash, get_password_hash, verify_password
from ledger.models.user import User
from ledger.schemas.user import MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Return the user for a valid email/password pair.

    Unknown email and wrong password raise the same AuthenticationError,
    and both paths perform one bcrypt comparison.
    """
    user = db.query(User).filter(User.email == normalize_email(email)).first()

    if not user:
        verify_password(password, dummy_password_hash())
        raise AuthenticationError(INVALID_CREDENTIALS)

    if not verify_password(password, user.password_hash):
        raise AuthenticationError(INVALID_CREDENTIALS)

    return user


def register_user(
    db: Session,
    email: str,
    password: str,
    confirm_password: str,
    name: Optional[str] = None
) -> User:
    """Create a user after checking the password rules and email uniqueness."""
    email = normalize_email(email)
    if not email or not password or not confirm_password:
        raise ValidationError("Please fill in all required fields")

    if password != confirm_password:
        raise ValidationError("Passwords do not match")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if db.query(User.id).filter(User.email == email).first():
        raise ConflictError("This email is already registered")

    user = User(
        email=email,
        name=name or None,
        password_hash=get_password_hash(password)
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise ConflictError("This email is already registered")
    db.refresh(user)

    logger.info("Registered user %s", user.id)
    return user
