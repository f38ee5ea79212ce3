from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

import boto3
from botocore.exceptions import ClientError
from cryptography.fernet import Fernet, InvalidToken

from .storage import StorageError


# Environment variable names for convenience configuration
ENV_BUCKET = "CHOICE_STATE_BUCKET"
ENV_PREFIX = "CHOICE_STATE_PREFIX"
ENV_FERNET_KEY = "CHOICE_FERNET_KEY"


def _to_fernet(key: str | bytes) -> Fernet:
    """Construct a Fernet instance from a user-provided key.

    The key must be a URL-safe base64-encoded 32-byte key (str or bytes),
    as returned by `cryptography.fernet.Fernet.generate_key()`.
    """
    if isinstance(key, str):
        key_bytes = key.encode("utf-8")
    else:
        key_bytes = key
    return Fernet(key_bytes)


@dataclass
class S3Location:
    bucket: str
    prefix: str

    def object_key(self, item_key: str) -> str:
        return f"{self.prefix}{item_key}"


class S3Storage:
    """
    S3-backed storage area, encrypted at rest using Fernet.

    Usage
    - Each item is one object at `prefix + key` holding the encrypted value.
    - `get_item()` returns None when the object does not exist.
    - `keys()` lists item keys under the prefix (prefix stripped).

    Environment variables (optional)
    - `CHOICE_STATE_BUCKET`: S3 bucket for the items
    - `CHOICE_STATE_PREFIX`: object key prefix (may be empty)
    - `CHOICE_FERNET_KEY`:   urlsafe base64-encoded key for Fernet
    """

    def __init__(
        self,
        *,
        s3: Optional[object] = None,
        bucket: str,
        prefix: str = "",
        fernet_key: str | bytes,
        region_name: Optional[str] = None,
    ) -> None:
        self._s3 = s3 or boto3.client("s3", region_name=region_name)
        self._loc = S3Location(bucket=bucket, prefix=prefix)
        self._fernet = _to_fernet(fernet_key)

    # -------- Construction helpers --------
    @classmethod
    def from_env(cls) -> "S3Storage":
        bucket = os.environ.get(ENV_BUCKET)
        fkey = os.environ.get(ENV_FERNET_KEY)
        if not bucket or not fkey:
            missing = [name for name, val in [(ENV_BUCKET, bucket), (ENV_FERNET_KEY, fkey)] if not val]
            raise RuntimeError(
                f"Missing required environment variables for S3 storage: {', '.join(missing)}"
            )
        return cls(bucket=bucket, prefix=os.environ.get(ENV_PREFIX, ""), fernet_key=fkey)

    # -------- Storage area --------
    def get_item(self, key: str) -> Optional[str]:
        """Read and decrypt one item.

        Raises:
        - StorageError if decryption or UTF-8 decoding fails.
        - botocore.exceptions.ClientError for S3 issues other than a missing object.
        """
        try:
            resp = self._s3.get_object(Bucket=self._loc.bucket, Key=self._loc.object_key(key))
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in ("NoSuchKey", "404"):
                return None
            raise

        body = resp["Body"].read()
        try:
            decrypted = self._fernet.decrypt(body)
        except InvalidToken as ex:
            raise StorageError(f"Failed to decrypt item {key!r}: invalid Fernet token") from ex
        try:
            return decrypted.decode("utf-8")
        except UnicodeDecodeError as ex:
            raise StorageError(f"Failed to decode item {key!r} as UTF-8") from ex

    def set_item(self, key: str, value: str) -> None:
        ciphertext = self._fernet.encrypt(value.encode("utf-8"))
        self._s3.put_object(
            Bucket=self._loc.bucket,
            Key=self._loc.object_key(key),
            Body=ciphertext,
            ContentType="application/octet-stream",
        )

    def remove_item(self, key: str) -> None:
        # DeleteObject succeeds for missing keys as well
        self._s3.delete_object(Bucket=self._loc.bucket, Key=self._loc.object_key(key))

    def keys(self) -> List[str]:
        out: List[str] = []
        token: Optional[str] = None
        while True:
            kwargs = {"Bucket": self._loc.bucket, "Prefix": self._loc.prefix}
            if token:
                kwargs["ContinuationToken"] = token
            resp = self._s3.list_objects_v2(**kwargs)
            for obj in resp.get("Contents", []):
                out.append(obj["Key"][len(self._loc.prefix):])
            if not resp.get("IsTruncated"):
                return out
            token = resp.get("NextContinuationToken")
