from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./app.db"

    # Google sign-in (id_token is checked against tokeninfo, aud must equal client id)
    google_client_id: str = ""
    google_tokeninfo_url: str = "https://oauth2.googleapis.com/tokeninfo"

    # Session token (JWT)
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"
    session_token_expire_seconds: int = 60 * 60 * 24 * 7  # 7 days

    # Comma-separated list of allowed CORS origins
    cors_origins: str = "http://localhost:5173,http://localhost:8787"

    # Cloudflare Stream (live inputs); empty token = stream API not configured
    cloudflare_account_id: str = ""
    cloudflare_stream_api_token: str = ""

    # R2 (S3-compatible) for presigned video uploads
    r2_access_key_id: str = ""
    r2_secret_access_key: str = ""
    r2_bucket_name: str = "video-uploads"
    r2_public_url: str = ""  # public base URL for playback, empty = no playback_url

    log_level: str = "INFO"

    class Config:
        env_file = ".env"

    @field_validator("secret_key")
    @classmethod
    def secret_key_not_empty(cls, v: str) -> str:
        # checked at startup; an empty key would fail every authenticated request
        if not v.strip():
            raise ValueError("SECRET_KEY must not be empty")
        return v

    def allowed_origins(self) -> list[str]:
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return origins or ["http://localhost:5173", "http://localhost:8787"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
