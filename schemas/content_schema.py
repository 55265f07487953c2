# content_schema.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


# Images
class ImageCreate(BaseModel):
    file_path: str = Field(..., min_length=1, max_length=500)
    caption: Optional[str] = Field(default=None, max_length=300)
    is_key_photo: bool = False
    sort_order: int = 0


class ImageRead(ImageCreate):
    id: int
    project_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Videos
class VideoCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    video_url: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(default=None, max_length=1000)
    sort_order: int = 0


class VideoRead(VideoCreate):
    id: int
    project_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Partners
class PartnerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    website_url: Optional[str] = Field(default=None, max_length=500)
    logo_path: Optional[str] = Field(default=None, max_length=500)
    contribution: Optional[str] = Field(default=None, max_length=500)
    sort_order: int = 0


class PartnerRead(PartnerCreate):
    id: int
    project_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
