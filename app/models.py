# app/models.py
from pydantic import BaseModel
from typing import Optional

class Product(BaseModel):
    category: str
    id: str
    name: str
    amount: int
    photo: Optional[str] = None
