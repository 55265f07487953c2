# category_schema.py
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)


class CategoryUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)


class CategoryRead(BaseModel):
    id: int
    name: str
    normalized_name: str
    created_at: datetime
    project_count: int = 0

    model_config = ConfigDict(from_attributes=True)
