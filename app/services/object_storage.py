"""Presigned upload URLs for R2 (S3-compatible) and public playback URLs for stored videos."""
import uuid
import boto3
from botocore.config import Config
from app.config import get_settings

PRESIGNED_EXPIRY_SECONDS = 3600  # 1 hour
DEFAULT_CONTENT_TYPE = "video/mp4"


class R2Storage:
    def __init__(self, account_id: str, access_key_id: str, secret_access_key: str, bucket_name: str):
        self.bucket_name = bucket_name
        self._client = boto3.client(
            "s3",
            endpoint_url=f"https://{account_id}.r2.cloudflarestorage.com",
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name="auto",
            config=Config(signature_version="s3v4"),
        )

    def create_upload_url(self, video_key: str, content_type: str | None = None) -> str:
        return self._client.generate_presigned_url(
            "put_object",
            Params={
                "Bucket": self.bucket_name,
                "Key": video_key,
                "ContentType": content_type or DEFAULT_CONTENT_TYPE,
            },
            ExpiresIn=PRESIGNED_EXPIRY_SECONDS,
        )


def new_video_key(file_name: str) -> str:
    return f"{uuid.uuid4()}-{file_name}"


def public_url(public_base_url: str | None, video_key: str) -> str | None:
    if not public_base_url:
        return None
    return f"{public_base_url.rstrip('/')}/{video_key}"


def get_object_storage() -> R2Storage | None:
    """None when R2 API credentials are not configured."""
    settings = get_settings()
    if not settings.r2_access_key_id or not settings.r2_secret_access_key:
        return None
    return R2Storage(
        settings.cloudflare_account_id,
        settings.r2_access_key_id,
        settings.r2_secret_access_key,
        settings.r2_bucket_name,
    )
