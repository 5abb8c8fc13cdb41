# vidshare/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
import os
from typing import Optional

load_dotenv()

class Settings(BaseSettings):
    # --- Application Settings ---
    app_name: str = "vidshare"
    port: int = int(os.getenv("PORT", 8000))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # --- Database ---
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./vidshare.db")
    db_echo: bool = False

    # --- Security & Auth ---
    access_token_secret: str = os.getenv("ACCESS_TOKEN_SECRET", "default_access_secret_change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 15))
    refresh_token_secret: str = os.getenv("REFRESH_TOKEN_SECRET", "default_refresh_secret_change_me")
    refresh_token_expire_days: int = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", 10))
    algorithm: str = os.getenv("ALGORITHM", "HS256")
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", 10))
    cookie_secure: bool = True

    # --- Frontend ---
    cors_origin: str = os.getenv("CORS_ORIGIN", "http://localhost:5173")

    # --- Uploads (Cloudinary) ---
    cloudinary_cloud_name: Optional[str] = os.getenv("CLOUDINARY_CLOUD_NAME")
    cloudinary_api_key: Optional[str] = os.getenv("CLOUDINARY_API_KEY")
    cloudinary_api_secret: Optional[str] = os.getenv("CLOUDINARY_API_SECRET")
    upload_tmp_dir: str = os.getenv("UPLOAD_TMP_DIR", "./public/temp")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
