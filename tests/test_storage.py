import io

import pytest
from botocore.exceptions import ClientError

from clarityworks.errors import StorageError
from clarityworks.services import storage as storage_module
from clarityworks.services.storage import CLIENTS_KEY, KeyValueStorage
from clarityworks.settings import Settings


class FakeS3:
    def __init__(self):
        self.objects = {}
        self.closed = False

    def put_object(self, Bucket, Key, Body, ContentType=None):
        self.objects[(Bucket, Key)] = Body

    def get_object(self, Bucket, Key):
        if (Bucket, Key) not in self.objects:
            raise ClientError({"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "GetObject")
        return {"Body": io.BytesIO(self.objects[(Bucket, Key)].encode("utf-8"))}

    def delete_object(self, Bucket, Key):
        self.objects.pop((Bucket, Key), None)

    def close(self):
        self.closed = True


def test_missing_key_reads_as_none(storage):
    assert storage.read(CLIENTS_KEY) is None


def test_write_then_read(storage, settings, tmp_path):
    storage.write(CLIENTS_KEY, '[{"a": 1}]')

    assert storage.read(CLIENTS_KEY) == '[{"a": 1}]'
    assert (tmp_path / "data" / f"{CLIENTS_KEY}.json").exists()


def test_delete(storage):
    storage.write("scratch", "{}")

    assert storage.delete("scratch") is True
    assert storage.delete("scratch") is False
    assert storage.read("scratch") is None


def test_unopened_storage_raises(settings):
    storage = KeyValueStorage(settings)

    with pytest.raises(StorageError):
        storage.read(CLIENTS_KEY)


def test_s3_backend(monkeypatch, tmp_path):
    fake = FakeS3()
    monkeypatch.setattr(storage_module.boto3, "client", lambda *args, **kwargs: fake)
    settings = Settings(
        _env_file=None,
        storage_dir=str(tmp_path),
        bucket_name="advisor-bucket",
        s3_access_key="key",
        s3_secret_key="secret",
        s3_prefix="cw",
    )

    with KeyValueStorage(settings) as storage:
        assert storage.use_s3
        assert storage.read(CLIENTS_KEY) is None
        storage.write(CLIENTS_KEY, "[]")
        assert fake.objects[("advisor-bucket", f"cw/{CLIENTS_KEY}.json")] == "[]"
        assert storage.read(CLIENTS_KEY) == "[]"
        assert storage.delete(CLIENTS_KEY) is True

    assert fake.closed
