from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from bookstore.database import get_session
from bookstore.dependencies.admin import require_admin
from bookstore.models.user import User
from bookstore.schemas.user_schemas import (
    ProfileUpdated,
    RoleStat,
    RoleUpdate,
    RoleUpdated,
    UserList,
    UserProfile,
    UserPublic,
    UserUpdate,
)
from bookstore.services import user_service
from bookstore.utils.token import get_current_user

router = APIRouter()


# -------- USER PROFILE --------

@router.get("/profile", response_model=UserProfile)
def get_my_profile(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return user_service.get_user_profile(session, current_user.id)


@router.put("/profile", response_model=ProfileUpdated)
def update_my_profile(
    payload: UserUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return user_service.update_user_profile(session, current_user.id, payload)


# -------- ADMIN USERS --------

@router.get("", response_model=UserList)
def list_users(
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
):
    return user_service.get_all_users(session, search=search, page=page, limit=limit)


@router.get("/search", response_model=List[UserPublic])
def search_users(
    q: str = Query(..., min_length=1),
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
):
    return user_service.search_users(session, q)


@router.get("/admin/stats", response_model=List[RoleStat])
def user_stats(
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
):
    return user_service.get_user_stats(session)


@router.get("/{user_id}", response_model=UserProfile)
def get_user(
    user_id: int,
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
):
    return user_service.get_user_profile(session, user_id)


@router.put("/{user_id}/role", response_model=RoleUpdated)
def update_role(
    user_id: int,
    payload: RoleUpdate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    return user_service.update_user_role(session, user_id, payload.role.value, admin)


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    return user_service.delete_user(session, user_id, admin)
