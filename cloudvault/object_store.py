import boto3
from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app

from cloudvault.errors import StorageError


def _describe(e):
    if isinstance(e, ClientError):
        return e.response.get("Error", {}).get("Message", str(e))
    return str(e)


class ObjectStore:
    """Thin wrapper around the S3 client used for uploaded files."""

    def __init__(self, client, bucket):
        self.client = client
        self.bucket = bucket

    @classmethod
    def from_config(cls, config):
        client = boto3.client(
            "s3",
            region_name=config.get("AWS_REGION"),
            endpoint_url=config.get("S3_ENDPOINT_URL"),
        )
        return cls(client, config.get("S3_BUCKET_NAME"))

    def put(self, stream, key, content_type):
        """Stream a file-like object to the bucket (multipart for big files)."""
        try:
            self.client.upload_fileobj(
                stream, self.bucket, key, ExtraArgs={"ContentType": content_type}
            )
        except (BotoCoreError, ClientError) as e:
            current_app.logger.error(f"S3 upload failed for key {key}: {_describe(e)}")
            raise StorageError("File upload failed")
        current_app.logger.info(f"S3 upload successful for key: {key}")

    def delete(self, key):
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            current_app.logger.error(f"S3 delete failed for key {key}: {_describe(e)}")
            raise StorageError("Failed to delete file")

    def presigned_download_url(self, key, file_name, expires_in):
        params = {
            "Bucket": self.bucket,
            "Key": key,
            "ResponseContentDisposition": f'attachment; filename="{file_name}"',
        }
        try:
            return self.client.generate_presigned_url(
                "get_object", Params=params, ExpiresIn=expires_in
            )
        except (BotoCoreError, ClientError) as e:
            current_app.logger.error(f"Could not presign key {key}: {_describe(e)}")
            raise StorageError("Failed to generate download link")


def get_object_store():
    return current_app.extensions["object_store"]
