import logging
import os
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import StorageError
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)

CLIENTS_KEY = "clarityworks_clients"
INTERACTIONS_KEY = "clarityworks_interactions"


class KeyValueStorage:
    """
    JSON documents by key, kept in a local directory (``<key>.json``) or, when
    a bucket and credentials are configured, in S3 under ``<s3_prefix>/<key>.json``.

    Must be opened before use and closed when the process is done with it.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.base_dir = self.settings.storage_dir
        self.use_s3 = self.settings.use_s3
        self.bucket_name = self.settings.bucket_name
        self.s3_client = None
        self.is_open = False

    def open(self) -> "KeyValueStorage":
        if self.use_s3:
            self.s3_client = boto3.client(
                's3',
                region_name=self.settings.s3_region,
                aws_access_key_id=self.settings.s3_access_key,
                aws_secret_access_key=self.settings.s3_secret_key
            )
            logger.info(f"Key/value storage backed by s3://{self.bucket_name}/{self.settings.s3_prefix}")
        else:
            os.makedirs(self.base_dir, exist_ok=True)
            logger.info(f"Key/value storage backed by {os.path.abspath(self.base_dir)}")
        self.is_open = True
        return self

    def close(self) -> None:
        if self.s3_client is not None:
            self.s3_client.close()
            self.s3_client = None
        self.is_open = False

    def __enter__(self) -> "KeyValueStorage":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _ensure_open(self):
        if not self.is_open:
            raise StorageError("Storage has not been opened")

    def _file_path(self, key: str) -> str:
        return os.path.join(self.base_dir, f"{key}.json")

    def _s3_key(self, key: str) -> str:
        return f"{self.settings.s3_prefix}/{key}.json"

    def read(self, key: str) -> Optional[str]:
        self._ensure_open()
        if self.use_s3:
            try:
                response = self.s3_client.get_object(Bucket=self.bucket_name, Key=self._s3_key(key))
                return response['Body'].read().decode('utf-8')
            except ClientError as e:
                if e.response['Error']['Code'] == "NoSuchKey":
                    return None
                logger.error(f"S3 Download Error: {e}")
                raise StorageError(f"Could not read {key}") from e
            except BotoCoreError as e:
                logger.error(f"S3 Download Error: {e}")
                raise StorageError(f"Could not read {key}") from e

        file_path = self._file_path(key)
        if not os.path.exists(file_path):
            return None
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            logger.error(f"Failed to read {file_path}: {e}")
            raise StorageError(f"Could not read {key}") from e

    def write(self, key: str, text: str) -> None:
        self._ensure_open()
        if self.use_s3:
            try:
                self.s3_client.put_object(
                    Bucket=self.bucket_name,
                    Key=self._s3_key(key),
                    Body=text,
                    ContentType='application/json'
                )
            except (ClientError, BotoCoreError) as e:
                logger.error(f"S3 Upload Error: {e}")
                raise StorageError(f"Could not write {key}") from e
            logger.debug(f"Saved {key} to S3")
            return

        file_path = self._file_path(key)
        tmp_path = f"{file_path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_path, file_path)
        except OSError as e:
            logger.error(f"Failed to write {file_path}: {e}")
            raise StorageError(f"Could not write {key}") from e
        logger.debug(f"Saved {key} to {file_path}")

    def delete(self, key: str) -> bool:
        self._ensure_open()
        if self.use_s3:
            if self.read(key) is None:
                return False
            try:
                self.s3_client.delete_object(Bucket=self.bucket_name, Key=self._s3_key(key))
            except (ClientError, BotoCoreError) as e:
                logger.error(f"S3 Delete Error: {e}")
                raise StorageError(f"Could not delete {key}") from e
            return True

        file_path = self._file_path(key)
        if not os.path.exists(file_path):
            return False
        try:
            os.remove(file_path)
        except OSError as e:
            logger.error(f"Failed to delete {file_path}: {e}")
            raise StorageError(f"Could not delete {key}") from e
        return True
