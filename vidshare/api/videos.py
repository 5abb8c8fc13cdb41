# vidshare/api/videos.py

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from typing import Optional
import logging

from vidshare.api.auth import CurrentIdentity, RepositoryDep
from vidshare.core.errors import AppError
from vidshare.core.storage import (
    AssetRemover,
    AssetUploader,
    get_asset_remover,
    get_asset_uploader,
    remove_all,
    upload_required,
)
from vidshare.schemas.response import ApiResponse
from vidshare.schemas.video import VideoRead
from vidshare.services.videos import VideoService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_video_service(repo: RepositoryDep) -> VideoService:
    return VideoService(repo)


@router.post("/", response_model=ApiResponse[VideoRead], status_code=status.HTTP_201_CREATED)
async def upload_video(
    identity: CurrentIdentity,
    title: str = Form(""),
    description: str = Form(""),
    video_file: Optional[UploadFile] = File(None, alias="videoFile"),
    thumbnail: Optional[UploadFile] = File(None),
    videos: VideoService = Depends(get_video_service),
    uploader: AssetUploader = Depends(get_asset_uploader),
    remover: AssetRemover = Depends(get_asset_remover),
):
    """
    Uploads a video and its thumbnail, then records the video for the caller.
    Duration comes from the upload response; nothing is extracted locally.
    """
    videos.check_details(title, description)

    video_asset = await upload_required(uploader, video_file, "video")
    thumbnail_asset = None
    try:
        thumbnail_asset = await upload_required(uploader, thumbnail, "thumbnail")
        video = videos.publish(
            owner_id=identity.account_id,
            title=title,
            description=description,
            video_url=video_asset.url,
            thumbnail_url=thumbnail_asset.url,
            duration=video_asset.duration,
        )
    except AppError:
        await remove_all(remover, video_asset, thumbnail_asset)
        raise
    return ApiResponse(
        status_code=status.HTTP_201_CREATED,
        message="video uploaded successfully",
        data=VideoRead.model_validate(video),
    )
