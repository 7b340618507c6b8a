from pydantic import BaseModel
from typing import Optional
from uuid import UUID
from datetime import datetime


class User(BaseModel):
    """Domain entity representing a registered user"""
    id: Optional[UUID] = None
    username: str
    email: str
    hashed_password: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
