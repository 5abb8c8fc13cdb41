# vidshare/core/storage.py
import asyncio
import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Optional

import aiofiles
import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from fastapi import UploadFile

from vidshare.core.config import settings
from vidshare.core.errors import ValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class UploadedAsset:
    url: str
    duration: Optional[float] = None  # reported for audio/video assets
    public_id: Optional[str] = None
    resource_type: str = "image"


AssetUploader = Callable[[Optional[Path]], Awaitable[Optional[UploadedAsset]]]
AssetRemover = Callable[[UploadedAsset], Awaitable[bool]]


def configure_cloudinary() -> bool:
    """Applies the Cloudinary credentials from settings. False when any is missing."""
    if not (settings.cloudinary_cloud_name and settings.cloudinary_api_key and settings.cloudinary_api_secret):
        return False
    cloudinary.config(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        secure=True,
    )
    return True


async def save_upload(upload: Optional[UploadFile]) -> Optional[Path]:
    """Spools a multipart upload into the temp directory and returns its path."""
    if upload is None or not upload.filename:
        return None
    tmp_dir = Path(settings.upload_tmp_dir)
    tmp_dir.mkdir(parents=True, exist_ok=True)
    target = tmp_dir / f"{uuid.uuid4().hex}_{Path(upload.filename).name}"
    async with aiofiles.open(target, mode="wb") as out:
        while True:
            chunk = await upload.read(CHUNK_SIZE)
            if not chunk:
                break
            await out.write(chunk)
    logger.debug(f"Spooled upload '{upload.filename}' to {target}")
    return target


def _discard(local_path: Path) -> None:
    try:
        os.remove(local_path)
    except FileNotFoundError:
        pass


async def upload_asset(local_path: Optional[Path]) -> Optional[UploadedAsset]:
    """Uploads a local file to Cloudinary and returns its URL, or None on any failure.

    The local file is removed whether or not the upload succeeded.
    """
    if not local_path:
        return None
    local_path = Path(local_path)
    if not local_path.exists():
        logger.error(f"Upload source {local_path} does not exist")
        return None

    try:
        if not configure_cloudinary():
            logger.error("Cloudinary credentials are not configured; upload skipped")
            return None
        # The SDK is blocking and streams the file from disk
        result = await asyncio.to_thread(cloudinary.uploader.upload, str(local_path), resource_type="auto")
    except (CloudinaryError, OSError) as e:
        logger.error(f"Upload of {local_path.name} failed: {e}")
        return None
    finally:
        _discard(local_path)

    asset_url = result.get("secure_url") or result.get("url")
    if not asset_url:
        logger.error(f"Upload of {local_path.name} returned no URL")
        return None
    duration = result.get("duration")
    logger.info(f"Uploaded {local_path.name} to {asset_url}")
    return UploadedAsset(
        url=asset_url,
        duration=float(duration) if duration is not None else None,
        public_id=result.get("public_id"),
        resource_type=result.get("resource_type", "image"),
    )


async def remove_asset(asset: UploadedAsset) -> bool:
    """Deletes an uploaded asset that will not be referenced after all."""
    if not asset.public_id or not configure_cloudinary():
        return False
    try:
        result = await asyncio.to_thread(
            cloudinary.uploader.destroy, asset.public_id, resource_type=asset.resource_type
        )
    except CloudinaryError as e:
        logger.error(f"Removing asset {asset.public_id} failed: {e}")
        return False
    removed = result.get("result") == "ok"
    if not removed:
        logger.warning(f"Asset {asset.public_id} was not removed: {result}")
    return removed


def get_asset_uploader() -> AssetUploader:
    return upload_asset


def get_asset_remover() -> AssetRemover:
    return remove_asset


async def upload_required(uploader: AssetUploader, upload: Optional[UploadFile], label: str) -> UploadedAsset:
    """Spools and uploads a mandatory file, turning any failure into a client error."""
    local_path = await save_upload(upload)
    if local_path is None:
        raise ValidationError(f"{label} file is required")
    asset = await uploader(local_path)
    if asset is None:
        raise ValidationError(f"error while uploading {label} file")
    return asset


async def remove_all(remover: AssetRemover, *assets: Optional[UploadedAsset]) -> None:
    """Rolls back uploads made for an operation that did not complete."""
    for asset in assets:
        if asset is not None:
            await remover(asset)
