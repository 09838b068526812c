import logging
from typing import Optional

from fastapi import HTTPException
from sqlmodel import Session

from bookstore.dto import user_dto
from bookstore.models.user import User
from bookstore.repositories import order_repository, user_repository
from bookstore.schemas.user_schemas import UserRegister, UserUpdate
from bookstore.utils.dates import utc_now
from bookstore.utils.hash import hash_password, verify_password
from bookstore.utils.token import create_access_token

logger = logging.getLogger(__name__)


def generate_token(user_id: int) -> str:
    return create_access_token({"user_id": user_id})


def register_user(session: Session, payload: UserRegister):
    data = user_dto.to_register_data(payload)

    existing = user_repository.find_by_email_or_username(
        session, data["email"], data["username"]
    )
    if existing:
        raise HTTPException(400, "User with this email or username already exists")

    user = User(**data, password=hash_password(payload.password))
    user = user_repository.save(session, user)

    logger.info(f"Registered user {user.id} ({user.username})")
    return user_dto.to_auth_response(user, generate_token(user.id))


def login_user(session: Session, email: str, password: str):
    user = user_repository.find_by_email(session, email.strip().lower())

    if not user or not verify_password(password, user.password):
        logger.info(f"Failed login for {email}")
        raise HTTPException(401, "Invalid credentials")

    return user_dto.to_auth_response(user, generate_token(user.id))


def get_user_or_404(session: Session, user_id: int) -> User:
    user = user_repository.find_by_id(session, user_id)
    if not user:
        raise HTTPException(404, "User not found")
    return user


def get_user_profile(session: Session, user_id: int):
    return user_dto.to_profile_response(get_user_or_404(session, user_id))


def update_user_profile(session: Session, user_id: int, payload: UserUpdate):
    user = get_user_or_404(session, user_id)
    data = user_dto.to_update_data(payload)

    if "email" in data and data["email"] != user.email:
        if user_repository.email_exists(session, data["email"], exclude_id=user.id):
            raise HTTPException(400, "Email already taken by another user")

    if "username" in data and data["username"] != user.username:
        if user_repository.username_exists(session, data["username"], exclude_id=user.id):
            raise HTTPException(400, "Username already taken by another user")

    for key, value in data.items():
        setattr(user, key, value)
    user.updated_at = utc_now()

    user = user_repository.save(session, user)

    return {
        "message": "Profile updated successfully",
        "user": user_dto.to_profile_response(user),
    }


def get_all_users(
    session: Session,
    *,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
):
    result = user_repository.find_all(session, search=search, page=page, limit=limit)
    stats = user_repository.get_user_stats(session)
    return user_dto.to_admin_list_response(result, stats)


def update_user_role(session: Session, user_id: int, role: str, current_user: User):
    if user_id == current_user.id:
        raise HTTPException(400, "You cannot change your own role")

    user = get_user_or_404(session, user_id)
    user.role = role
    user.updated_at = utc_now()
    user = user_repository.save(session, user)

    logger.info(f"User {current_user.id} set role of user {user_id} to {role}")
    return {
        "message": "User role updated successfully",
        "user": user_dto.to_public_response(user),
    }


def delete_user(session: Session, user_id: int, current_user: User):
    if user_id == current_user.id:
        raise HTTPException(400, "You cannot delete your own account")

    user = get_user_or_404(session, user_id)

    if order_repository.exists_for_user(session, user_id):
        raise HTTPException(
            400,
            "User cannot be deleted because they have existing orders."
        )

    user_repository.delete(session, user)
    logger.info(f"User {current_user.id} deleted user {user_id}")
    return {"message": "User deleted successfully"}


def search_users(session: Session, term: str):
    return [user_dto.to_public_response(u) for u in user_repository.search_users(session, term)]


def get_user_stats(session: Session):
    return user_repository.get_user_stats(session)
