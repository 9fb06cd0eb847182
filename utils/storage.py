"""
Save sinks for rendered report PDFs.

LocalStorage writes under REPORTS_OUTPUT_DIR; S3Storage uploads to a private
bucket. Both address files by a relative key such as "reports/<file>.pdf".
"""
import logging
import os

import boto3

logger = logging.getLogger(__name__)


def _read_body(data):
    """bytes from bytes or a file-like object, leaving the stream rewound."""
    if hasattr(data, 'read'):
        data.seek(0)
        body = data.read()
        data.seek(0)
        return body
    return bytes(data)


class StorageBackend:
    def put_file(self, data, key, content_type=None):
        """Store data under key and return the key."""
        raise NotImplementedError


class LocalStorage(StorageBackend):
    def __init__(self, base_dir):
        self.base_dir = os.path.abspath(base_dir)
        os.makedirs(self.base_dir, exist_ok=True)

    def _path(self, key):
        path = os.path.abspath(os.path.join(self.base_dir, key))
        if os.path.commonpath([path, self.base_dir]) != self.base_dir:
            raise ValueError(f"Storage key escapes storage root: {key}")
        return path

    def put_file(self, data, key, content_type=None):
        path = self._path(key)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        # Readers never see a partially written PDF
        tmp_path = f"{path}.part"
        with open(tmp_path, 'wb') as f:
            f.write(_read_body(data))
        os.replace(tmp_path, path)
        logger.debug(f"[Storage] Wrote {path}")
        return key


class S3Storage(StorageBackend):
    def __init__(self, bucket_name, region, access_key=None, secret_key=None, prefix="", client=None):
        self.s3 = client or boto3.client(
            's3',
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key
        )
        self.bucket = bucket_name
        self.prefix = prefix.strip('/')

    def _s3_key(self, key):
        key = key.lstrip('/')
        return f"{self.prefix}/{key}" if self.prefix else key

    def put_file(self, data, key, content_type=None):
        # Objects stay private; no ACL
        self.s3.put_object(
            Bucket=self.bucket,
            Key=self._s3_key(key),
            Body=_read_body(data),
            ContentType=content_type or "application/octet-stream",
        )
        return key


def get_storage():
    """The configured save sink."""
    from config import STORAGE_BACKEND, S3_BUCKET, S3_PREFIX, AWS_REGION, REPORTS_OUTPUT_DIR

    if STORAGE_BACKEND == 's3':
        access_key = os.environ.get('AWS_ACCESS_KEY_ID')
        secret_key = os.environ.get('AWS_SECRET_ACCESS_KEY')
        if not access_key or not secret_key:
            logger.warning("[Storage] S3 backend selected without explicit AWS credentials; relying on the default chain.")
        return S3Storage(S3_BUCKET, AWS_REGION, access_key, secret_key, prefix=S3_PREFIX)

    return LocalStorage(REPORTS_OUTPUT_DIR)
