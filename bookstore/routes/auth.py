from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from bookstore.database import get_session
from bookstore.dto import user_dto
from bookstore.models.user import User
from bookstore.schemas.user_schemas import AuthResponse, UserLogin, UserProfile, UserRegister
from bookstore.services import user_service
from bookstore.utils.token import get_current_user


router = APIRouter()


# -------- AUTH ROUTES --------

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register_user(payload: UserRegister, session: Session = Depends(get_session)):
    return user_service.register_user(session, payload)


@router.post("/login", response_model=AuthResponse)
def login(payload: UserLogin, session: Session = Depends(get_session)):
    return user_service.login_user(session, str(payload.email), payload.password)


@router.get("/me", response_model=UserProfile)
def get_me(current_user: User = Depends(get_current_user)):
    return user_dto.to_profile_response(current_user)


@router.post("/logout")
def logout():
    return {"message": "Logout successful"}
