from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from bookstore.utils.dates import TIMESTAMP, utc_now


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, unique=True)
    email: str = Field(index=True, unique=True)
    password: str
    first_name: str
    last_name: str
    role: str = Field(default="user", index=True)
    address: Optional[str] = None
    phone_number: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
