"""
S3 / MinIO object store on top of boto3.

botocore reports a missing key differently depending on the call:
head_object gives a bare 404, get_object gives NoSuchKey. Both count as
"not found"; every other ClientError or BotoCoreError becomes StoreFault.

Retries are disabled (max_attempts=1): one attempt per step per request.
"""

import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from config.settings import Settings
from models.errors import NotFound, StoreFault
from storage.base import AbstractObjectStore

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = ("404", "NoSuchKey", "NotFound")


def is_not_found(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") in _NOT_FOUND_CODES


class S3ObjectStore(AbstractObjectStore):

    def __init__(self, client, bucket: str):
        self._client = client
        self.bucket = bucket

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3ObjectStore":
        client = boto3.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT_URL,
            region_name=settings.S3_REGION,
            aws_access_key_id=settings.S3_ACCESS_KEY,
            aws_secret_access_key=settings.S3_SECRET_KEY,
            use_ssl=settings.S3_USE_SSL,
            config=Config(retries={"max_attempts": 1, "mode": "standard"}),
        )
        return cls(client, settings.S3_BUCKET)

    def exists(self, key: str) -> bool:
        try:
            self._client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if is_not_found(e):
                return False
            raise StoreFault(f"HEAD {key} failed: {e}") from e
        except BotoCoreError as e:
            raise StoreFault(f"HEAD {key} failed: {e}") from e
        return True

    def get(self, key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=self.bucket, Key=key)
            body = response["Body"]
            try:
                return body.read()
            finally:
                body.close()
        except ClientError as e:
            if is_not_found(e):
                raise NotFound(f"No such object: {key}") from e
            raise StoreFault(f"GET {key} failed: {e}") from e
        except BotoCoreError as e:
            raise StoreFault(f"GET {key} failed: {e}") from e

    def put(self, key: str, data: bytes, content_type: str) -> None:
        logger.info(f"Uploading {len(data)} bytes → s3://{self.bucket}/{key}")
        try:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreFault(f"PUT {key} failed: {e}") from e

    def check(self) -> None:
        try:
            self._client.head_bucket(Bucket=self.bucket)
        except ClientError as e:
            if is_not_found(e):
                raise StoreFault(f'Bucket "{self.bucket}" not found') from e
            raise StoreFault(f'Bucket "{self.bucket}" is not accessible: {e}') from e
        except BotoCoreError as e:
            raise StoreFault(f'Bucket "{self.bucket}" is not reachable: {e}') from e

    @property
    def backend_name(self) -> str:
        return "s3"
