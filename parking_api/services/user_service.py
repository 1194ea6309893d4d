# parking_api/services/user_service.py
"""
User accounts: registration, login, profile and admin management.
Passwords are stored as werkzeug hashes and never returned.
"""

from sqlalchemy.orm import Session
from parking_api.errors import NotFound, Conflict, Unauthorized, Forbidden, InvalidInput
from parking_api.models.user import User, Role
from parking_api.schemas.user import UserRegister, UserUpdate, PasswordChange
from parking_api.security import Principal, hash_password, verify_password, create_access_token
from parking_api.services.activity_service import record_activity
from parking_api.services.notification_service import send_welcome_email
from parking_api.utils.logger import get_logger

logger = get_logger(__name__)


def get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    return user


def list_users(db: Session):
    return db.query(User).order_by(User.created_at).all()


def register_user(db: Session, body: UserRegister, notifier=None) -> User:
    if db.query(User).filter(User.email == body.email).first():
        raise Conflict("User with this email already exists")

    user = User(
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        password=hash_password(body.password),
        role=Role.USER.value,
    )
    db.add(user)
    db.flush()
    record_activity(db, user.id, f"Registered account {user.email}")
    db.commit()
    db.refresh(user)
    logger.info(f"[USER] Registered {user.email} role={user.role}")

    try:
        (notifier or send_welcome_email)(user)
    except Exception as e:
        logger.error(f"[USER] Welcome e-mail to {user.email} failed: {e}")
    return user


def authenticate(db: Session, email: str, password: str) -> tuple[User, str]:
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if not user or not verify_password(password, user.password):
        raise Unauthorized("Invalid email or password")
    logger.info(f"[USER] Login {user.email}")
    return user, create_access_token(user)


def update_user(db: Session, user_id: str, body: UserUpdate, principal: Principal) -> User:
    user = get_user(db, user_id)

    if body.email is not None and body.email != user.email:
        if db.query(User).filter(User.email == body.email).first():
            raise Conflict("User with this email already exists")
        user.email = body.email
    if body.first_name:
        user.first_name = body.first_name
    if body.last_name:
        user.last_name = body.last_name
    if body.role is not None:
        user.role = body.role.value

    record_activity(db, principal.id, f"Updated user {user_id}")
    db.commit()
    db.refresh(user)
    return user


def change_password(db: Session, user_id: str, body: PasswordChange, principal: Principal) -> None:
    if principal.id != user_id and not principal.is_admin:
        raise Forbidden("Not authorized to change another user's password")

    user = get_user(db, user_id)
    if not verify_password(body.current_password, user.password):
        raise InvalidInput("Current password is incorrect")

    user.password = hash_password(body.new_password)
    record_activity(db, principal.id, f"Changed password of user {user_id}")
    db.commit()
    logger.info(f"[USER] Password changed for {user.email}")


def delete_user(db: Session, user_id: str, principal: Principal) -> None:
    user = get_user(db, user_id)
    email = user.email
    db.delete(user)
    record_activity(db, principal.id, f"Deleted user {user_id}")
    db.commit()
    logger.info(f"[USER] Deleted {email}")
