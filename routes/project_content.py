# routes/project_content.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from core.database import get_session
from models.models import ProjectImage, ProjectPartner, ProjectVideo
from schemas.content_schema import (
    ImageCreate, ImageRead, VideoCreate, VideoRead, PartnerCreate, PartnerRead
)
from services import content_service, project_service

router = APIRouter(tags=["Project Content"])


# ================================================================
#  ✅ Images
# ================================================================
@router.get("/{project_id}/images", response_model=List[ImageRead])
def list_images(project_id: int, session: Session = Depends(get_session)):
    project = project_service.get_project(session, project_id)
    return [ImageRead.model_validate(image) for image in project.images]


@router.post("/{project_id}/images", response_model=ImageRead, status_code=status.HTTP_201_CREATED)
def add_image(project_id: int, payload: ImageCreate, session: Session = Depends(get_session)):
    image = content_service.add_content(session, project_id, ProjectImage, payload)
    return ImageRead.model_validate(image)


@router.delete("/{project_id}/images/{image_id}")
def delete_image(project_id: int, image_id: int, session: Session = Depends(get_session)):
    content_service.delete_content(session, project_id, ProjectImage, image_id)
    return {"message": "Image removed from project"}


# ================================================================
#  ✅ Videos
# ================================================================
@router.get("/{project_id}/videos", response_model=List[VideoRead])
def list_videos(project_id: int, session: Session = Depends(get_session)):
    project = project_service.get_project(session, project_id)
    return [VideoRead.model_validate(video) for video in project.videos]


@router.post("/{project_id}/videos", response_model=VideoRead, status_code=status.HTTP_201_CREATED)
def add_video(project_id: int, payload: VideoCreate, session: Session = Depends(get_session)):
    video = content_service.add_content(session, project_id, ProjectVideo, payload)
    return VideoRead.model_validate(video)


@router.delete("/{project_id}/videos/{video_id}")
def delete_video(project_id: int, video_id: int, session: Session = Depends(get_session)):
    content_service.delete_content(session, project_id, ProjectVideo, video_id)
    return {"message": "Video removed from project"}


# ================================================================
#  ✅ Partners
# ================================================================
@router.get("/{project_id}/partners", response_model=List[PartnerRead])
def list_partners(project_id: int, session: Session = Depends(get_session)):
    project = project_service.get_project(session, project_id)
    return [PartnerRead.model_validate(partner) for partner in project.partners]


@router.post("/{project_id}/partners", response_model=PartnerRead, status_code=status.HTTP_201_CREATED)
def add_partner(project_id: int, payload: PartnerCreate, session: Session = Depends(get_session)):
    partner = content_service.add_content(session, project_id, ProjectPartner, payload)
    return PartnerRead.model_validate(partner)


@router.delete("/{project_id}/partners/{partner_id}")
def delete_partner(project_id: int, partner_id: int, session: Session = Depends(get_session)):
    content_service.delete_content(session, project_id, ProjectPartner, partner_id)
    return {"message": "Partner removed from project"}
