from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from typing import List, Optional
from datetime import datetime

from bookstore.constants.roles import UserRole
from bookstore.schemas.book_schemas import Pagination


class UserRegister(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)
    confirm_password: Optional[str] = None
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    address: Optional[str] = None
    phone_number: Optional[str] = None

    @model_validator(mode="after")
    def validate_passwords(self):
        if self.confirm_password is not None and self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class UserUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    username: Optional[str] = Field(None, min_length=3, max_length=50)
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    phone_number: Optional[str] = None

class RoleUpdate(BaseModel):
    role: UserRole

class UserPublic(BaseModel):
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    role: str
    full_name: str

class UserProfile(UserPublic):
    address: Optional[str]
    phone_number: Optional[str]
    member_since: datetime

class UserAdminRow(UserPublic):
    member_since: datetime
    last_updated: datetime

class AuthResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserPublic

class ProfileUpdated(BaseModel):
    message: str
    user: UserProfile

class RoleUpdated(BaseModel):
    message: str
    user: UserPublic

class RoleStat(BaseModel):
    role: str
    count: int

class UserList(BaseModel):
    users: List[UserAdminRow]
    pagination: Pagination
    stats: List[RoleStat] = []
