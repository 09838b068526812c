from bookstore.models.user import User
from bookstore.schemas.user_schemas import (
    AuthResponse,
    UserAdminRow,
    UserList,
    UserProfile,
    UserPublic,
    UserRegister,
    UserUpdate,
)


def to_public_response(user: User) -> UserPublic:
    return UserPublic(
        id=user.id,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
        full_name=user.full_name,
    )


def to_auth_response(user: User, token: str) -> AuthResponse:
    return AuthResponse(
        message="Authentication successful",
        token=token,
        user=to_public_response(user),
    )


def to_profile_response(user: User) -> UserProfile:
    return UserProfile(
        **to_public_response(user).model_dump(),
        address=user.address,
        phone_number=user.phone_number,
        member_since=user.created_at,
    )


def to_admin_list_response(page: dict, stats: list) -> UserList:
    return UserList(
        users=[
            UserAdminRow(
                **to_public_response(user).model_dump(),
                member_since=user.created_at,
                last_updated=user.updated_at,
            )
            for user in page["results"]
        ],
        pagination=page["pagination"],
        stats=stats,
    )


def to_register_data(payload: UserRegister) -> dict:
    return {
        "username": payload.username.lower(),
        "email": str(payload.email).lower(),
        "first_name": payload.first_name,
        "last_name": payload.last_name,
        "address": payload.address,
        "phone_number": payload.phone_number,
    }


def to_update_data(payload: UserUpdate) -> dict:
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in data:
        data["email"] = str(data["email"]).lower()
    if "username" in data:
        data["username"] = data["username"].lower()
    return data
