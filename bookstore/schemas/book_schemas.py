from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime


class BookCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    author: str = Field(..., min_length=1, max_length=100)
    isbn: Optional[str] = None

    price: float = Field(..., ge=0)
    stock: int = Field(default=0, ge=0)
    category: str = Field(..., min_length=1)

    description: Optional[str] = None
    image_url: Optional[str] = None



class BookUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    author: Optional[str] = Field(None, min_length=1, max_length=100)
    isbn: Optional[str] = None

    price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = Field(None, min_length=1)

    description: Optional[str] = None
    image_url: Optional[str] = None



class BookPublic(BaseModel):
    id: int
    title: str
    author: str
    isbn: Optional[str]
    price: float
    stock: int
    category: str
    description: Optional[str]
    image_url: Optional[str]
    is_available: bool



class BookAdmin(BookPublic):
    created_at: datetime
    updated_at: datetime
    low_stock: bool



class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    limit: int
    has_next: bool
    has_prev: bool



class BookList(BaseModel):
    books: List[BookPublic]
    pagination: Pagination
    categories: List[str] = []



class BookMessage(BaseModel):
    message: str
    book: BookAdmin



class StockLine(BaseModel):
    book_id: int
    quantity: int = Field(..., ge=1)



class StockCheckResult(BaseModel):
    book_id: int
    valid: bool
    title: Optional[str] = None
    author: Optional[str] = None
    price: Optional[float] = None
    available_stock: Optional[int] = None
    error: Optional[str] = None
