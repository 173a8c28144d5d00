# backend/schemas.py
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Property(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    title: Optional[str] = None
    location: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    BHK: Optional[int] = None
    gym: bool = False
    parking: bool = False
    description: Optional[str] = None
    image: Optional[Union[str, List[str]]] = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str


# --- User Models ---
class Role(str, Enum):
    USER = "user"
    OWNER = "owner"
    ADMIN = "admin"


class UserCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    username: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: Role = Role.USER
    profile_pic: str = Field(default="", alias="profilePic")


class UserUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    username: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, min_length=1)
    password: Optional[str] = Field(default=None, min_length=1)
    role: Optional[Role] = None
    profile_pic: Optional[str] = Field(default=None, alias="profilePic")


class UserPublic(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    email: str
    role: Role
    profile_pic: str = Field(default="", alias="profilePic")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
