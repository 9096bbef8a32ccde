# tests/_stubs.py

from botocore.exceptions import ClientError


class FakeS3Client:
    """In-memory stand-in for the boto3 S3 client calls ObjectStore makes."""

    def __init__(self):
        self.objects = {}
        self.fail = False

    def _maybe_fail(self, operation):
        if self.fail:
            raise ClientError(
                {"Error": {"Code": "ServiceUnavailable", "Message": "stub outage"}},
                operation,
            )

    def upload_fileobj(self, fileobj, bucket, key, ExtraArgs=None):
        self._maybe_fail("PutObject")
        self.objects[(bucket, key)] = {
            "body": fileobj.read(),
            "content_type": (ExtraArgs or {}).get("ContentType"),
        }

    def delete_object(self, Bucket, Key):
        self._maybe_fail("DeleteObject")
        self.objects.pop((Bucket, Key), None)
        return {}

    def generate_presigned_url(self, ClientMethod, Params=None, ExpiresIn=3600):
        self._maybe_fail(ClientMethod)
        return f"https://{Params['Bucket']}.s3.test/{Params['Key']}?X-Amz-Expires={ExpiresIn}"

    def keys(self):
        return [key for _, key in self.objects]
