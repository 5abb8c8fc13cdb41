# vidshare/api/users.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Cookie, Depends, File, Form, Response, UploadFile, status

from vidshare.api.auth import (
    REFRESH_COOKIE,
    CurrentIdentity,
    clear_auth_cookies,
    get_credential_store,
    get_history_aggregator,
    get_profile_aggregator,
    get_token_service,
    set_auth_cookies,
)
from vidshare.core.errors import AppError, ValidationError
from vidshare.core.storage import (
    AssetRemover,
    AssetUploader,
    get_asset_remover,
    get_asset_uploader,
    remove_all,
    upload_required,
)
from vidshare.schemas.account import (
    AccountRead,
    AccountUpdate,
    ChannelProfile,
    IdentityRead,
    LoginRequest,
    LoginResult,
    PasswordChange,
    RefreshRequest,
    TokenPair,
)
from vidshare.schemas.response import ApiResponse
from vidshare.schemas.video import VideoWithOwner
from vidshare.services.credentials import CredentialStore
from vidshare.services.history import HistoryAggregator
from vidshare.services.profile import ProfileAggregator
from vidshare.services.tokens import TokenService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=ApiResponse[AccountRead], status_code=status.HTTP_201_CREATED)
async def register(
    username: str = Form(""),
    email: str = Form(""),
    full_name: str = Form("", alias="fullName"),
    password: str = Form(""),
    avatar: Optional[UploadFile] = File(None),
    cover_image: Optional[UploadFile] = File(None, alias="coverImage"),
    store: CredentialStore = Depends(get_credential_store),
    uploader: AssetUploader = Depends(get_asset_uploader),
    remover: AssetRemover = Depends(get_asset_remover),
):
    """Creates an account. Uploads happen before the insert and are removed again if it does not happen."""
    if any(not field.strip() for field in (username, email, full_name, password)):
        raise ValidationError("all fields are required")
    store.ensure_available(username, email)

    avatar_asset = await upload_required(uploader, avatar, "avatar")
    cover_asset = None
    try:
        if cover_image is not None and cover_image.filename:
            cover_asset = await upload_required(uploader, cover_image, "cover image")
        account = store.register(
            username, email, full_name, password, avatar_asset.url, cover_asset.url if cover_asset else None
        )
    except AppError:
        await remove_all(remover, avatar_asset, cover_asset)
        raise
    return ApiResponse(
        status_code=status.HTTP_201_CREATED,
        message="user registered successfully",
        data=AccountRead.model_validate(account),
    )


@router.post("/login", response_model=ApiResponse[LoginResult])
async def login(
    response: Response,
    credentials: LoginRequest,
    store: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
):
    account = store.authenticate(credentials.username or credentials.email, credentials.password)
    pair = tokens.issue_pair(account)
    set_auth_cookies(response, pair)
    logger.info(f"User {account.username} logged in")
    return ApiResponse(
        message="user logged in successfully",
        data=LoginResult(
            user=AccountRead.model_validate(account),
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        ),
    )


@router.post("/logout", response_model=ApiResponse)
async def logout(
    response: Response,
    identity: CurrentIdentity,
    tokens: TokenService = Depends(get_token_service),
):
    tokens.revoke(identity.account_id)
    clear_auth_cookies(response)
    return ApiResponse(message="user logged out")


@router.post("/refresh-token", response_model=ApiResponse[TokenPair])
async def refresh_token(
    response: Response,
    body: Optional[RefreshRequest] = Body(None),
    refresh_cookie: Optional[str] = Cookie(None, alias=REFRESH_COOKIE),
    tokens: TokenService = Depends(get_token_service),
):
    presented = refresh_cookie or (body.refresh_token if body else None)
    _, pair = tokens.rotate(presented)
    set_auth_cookies(response, pair)
    return ApiResponse(message="access token refreshed", data=pair)


@router.post("/change-password", response_model=ApiResponse)
async def change_password(
    passwords: PasswordChange,
    identity: CurrentIdentity,
    store: CredentialStore = Depends(get_credential_store),
):
    store.change_password(identity.account_id, passwords.old_password, passwords.new_password)
    return ApiResponse(message="password changed successfully")


@router.patch("/update-account", response_model=ApiResponse[AccountRead])
async def update_account(
    details: AccountUpdate,
    identity: CurrentIdentity,
    store: CredentialStore = Depends(get_credential_store),
):
    account = store.update_details(identity.account_id, details.username, details.full_name)
    return ApiResponse(message="account details updated", data=AccountRead.model_validate(account))


@router.patch("/update-avatar", response_model=ApiResponse[AccountRead])
async def update_avatar(
    identity: CurrentIdentity,
    avatar: Optional[UploadFile] = File(None),
    store: CredentialStore = Depends(get_credential_store),
    uploader: AssetUploader = Depends(get_asset_uploader),
):
    asset = await upload_required(uploader, avatar, "avatar")
    account = store.update_avatar(identity.account_id, asset.url)
    return ApiResponse(message="avatar updated", data=AccountRead.model_validate(account))


@router.patch("/update-cover-image", response_model=ApiResponse[AccountRead])
async def update_cover_image(
    identity: CurrentIdentity,
    cover_image: Optional[UploadFile] = File(None, alias="coverImage"),
    store: CredentialStore = Depends(get_credential_store),
    uploader: AssetUploader = Depends(get_asset_uploader),
):
    asset = await upload_required(uploader, cover_image, "cover image")
    account = store.update_cover_image(identity.account_id, asset.url)
    return ApiResponse(message="cover image updated", data=AccountRead.model_validate(account))


@router.get("/details", response_model=ApiResponse[IdentityRead])
async def details(identity: CurrentIdentity):
    return ApiResponse(
        message="current user",
        data=IdentityRead(
            id=identity.account_id,
            username=identity.username,
            email=identity.email,
            full_name=identity.full_name,
        ),
    )


@router.get("/c/{username}", response_model=ApiResponse[ChannelProfile])
async def channel_profile(
    username: str,
    identity: CurrentIdentity,
    profiles: ProfileAggregator = Depends(get_profile_aggregator),
):
    profile = profiles.get_channel_profile(username, identity.account_id)
    return ApiResponse(message="channel profile fetched", data=profile)


@router.get("/history", response_model=ApiResponse[List[VideoWithOwner]])
async def watch_history(
    identity: CurrentIdentity,
    history: HistoryAggregator = Depends(get_history_aggregator),
):
    videos = history.get_watch_history(identity.account_id)
    return ApiResponse(message="watch history fetched", data=videos)
