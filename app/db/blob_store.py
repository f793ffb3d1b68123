"""
Key-value blob stores backing the transaction store.

Each backend keeps one text blob per key. Reads return ``None`` when the key
is missing or unreadable, writes return ``True``/``False``; failures are
logged here and never raised to the caller.
"""
import logging
from pathlib import Path
from typing import MutableMapping, Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def put(self, key: str, value: str) -> bool:
        ...

    def describe(self) -> dict:
        ...


class InMemoryBlobStore:
    """Mapping-backed store. Pass your own dict to inspect what was written."""

    def __init__(self, data: Optional[MutableMapping[str, str]] = None) -> None:
        self.data = data if data is not None else {}

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def put(self, key: str, value: str) -> bool:
        self.data[key] = value
        return True

    def describe(self) -> dict:
        return {"backend": "memory", "status": "accessible", "keys": len(self.data)}


class FileBlobStore:
    """One ``<key>.json`` file per key inside ``directory``."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read blob {path}: {e}")
            return None

    def put(self, key: str, value: str) -> bool:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".json.tmp")
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
            return True
        except OSError as e:
            logger.error(f"Failed to write blob {path}: {e}")
            return False

    def describe(self) -> dict:
        accessible = self.directory.is_dir() or not self.directory.exists()
        return {
            "backend": "file",
            "directory": str(self.directory),
            "status": "accessible" if accessible else "error",
        }


class S3BlobStore:
    """One object per key under ``prefix`` in an S3 bucket."""

    def __init__(self, bucket: str, region: str, prefix: str = "", client=None) -> None:
        self.bucket = bucket
        self.region = region
        self.prefix = prefix
        # Default AWS credential chain (env vars, credentials file, or IAM role)
        self._s3 = client or boto3.client("s3", region_name=region)

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}.json"

    def get(self, key: str) -> Optional[str]:
        try:
            obj = self._s3.get_object(Bucket=self.bucket, Key=self._key(key))
            return obj["Body"].read().decode("utf-8")
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("NoSuchKey", "404"):
                return None
            logger.error(f"S3 get failed for {self._key(key)}: {error_code}")
            return None
        except (BotoCoreError, UnicodeDecodeError) as e:
            logger.error(f"S3 get failed for {self._key(key)}: {e}")
            return None

    def put(self, key: str, value: str) -> bool:
        try:
            self._s3.put_object(
                Bucket=self.bucket,
                Key=self._key(key),
                Body=value.encode("utf-8"),
                ContentType="application/json",
            )
            return True
        except ClientError as e:
            logger.error(f"S3 put failed for {self._key(key)}: {e.response['Error']['Message']}")
            return False
        except BotoCoreError as e:
            logger.error(f"S3 put failed for {self._key(key)}: {e}")
            return False

    def describe(self) -> dict:
        status = {"backend": "s3", "bucket": self.bucket, "region": self.region}
        try:
            self._s3.head_bucket(Bucket=self.bucket)
            status["status"] = "accessible"
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            status["status"] = "error"
            status["error"] = f"{error_code}: {str(e)}"
            logger.error(f"S3 check failed: {str(e)}")
        except BotoCoreError as e:
            status["status"] = "error"
            status["error"] = str(e)
            logger.error(f"S3 check failed: {str(e)}")
        return status


def build_blob_store(settings) -> BlobStore:
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        return InMemoryBlobStore()
    if backend == "file":
        return FileBlobStore(settings.STORAGE_DIR)
    if backend == "s3":
        return S3BlobStore(settings.S3_BUCKET_NAME, settings.S3_REGION, settings.S3_PREFIX)
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND}")
