"""
Amazon S3 storage utility for uploading files.
Works with S3-compatible stores (Cloudflare R2, MinIO) through a custom endpoint.
"""

import os
import time
import mimetypes
import boto3

from mediautils.config.settings import (
    AWS_REGION,
    S3_ENDPOINT_URL,
    S3_ACCESS_KEY_ID,
    S3_SECRET_ACCESS_KEY
)


class S3Storage:
    """Class for handling S3 storage operations."""

    def __init__(self, region=AWS_REGION, endpoint_url=S3_ENDPOINT_URL):
        """Initialize the S3 client.

        Credentials come from S3_ACCESS_KEY_ID/S3_SECRET_ACCESS_KEY when set,
        otherwise from boto3's default credential chain.

        Args:
            region: AWS region where the bucket is hosted
            endpoint_url: Custom endpoint for S3-compatible stores
        """
        self.region = region
        self.endpoint_url = endpoint_url or None

        client_kwargs = {'region_name': region}
        if self.endpoint_url:
            client_kwargs['endpoint_url'] = self.endpoint_url
        if S3_ACCESS_KEY_ID and S3_SECRET_ACCESS_KEY:
            client_kwargs['aws_access_key_id'] = S3_ACCESS_KEY_ID
            client_kwargs['aws_secret_access_key'] = S3_SECRET_ACCESS_KEY

        self.client = boto3.client('s3', **client_kwargs)

    @staticmethod
    def generate_key(filepath):
        """Generate a unique object key for a file.

        Args:
            filepath: Local path of the file

        Returns:
            Key of the form ``<epoch millis>_<filename>``
        """
        filename = os.path.basename(filepath)
        return f"{int(time.time() * 1000)}_{filename}"

    @staticmethod
    def guess_content_type(filepath):
        """Guess the MIME type of a file from its name."""
        content_type, _ = mimetypes.guess_type(filepath)
        return content_type or 'application/octet-stream'

    def public_url(self, bucket, key):
        """Build the public URL of an object.

        Args:
            bucket: Bucket name
            key: Object key

        Returns:
            Public URL of the object
        """
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{bucket}/{key}"
        return f"https://{bucket}.s3.{self.region}.amazonaws.com/{key}"

    def upload_file(self, filepath, bucket, public_read=True):
        """Upload a local file to a bucket.

        Args:
            filepath: Local path of the file to upload
            bucket: Name of the destination bucket
            public_read: Make the object publicly readable

        Returns:
            The response from the S3 service
        """
        with open(filepath, 'rb') as file:
            body = file.read()

        key = self.generate_key(filepath)
        content_type = self.guess_content_type(filepath)

        put_params = {
            'Bucket': bucket,
            'Key': key,
            'Body': body,
            'ContentType': content_type,
            'ACL': 'public-read' if public_read else 'private',
        }

        print(f"[DEBUG] Uploading {len(body)} bytes to s3://{bucket}/{key} ({content_type})")

        try:
            response = self.client.put_object(**put_params)
        except Exception as e:
            print(f"[ERROR] Failed to upload {filepath} to S3: {e}")
            raise

        if public_read:
            print(f"[INFO] Successfully uploaded file to S3: {self.public_url(bucket, key)}")
        else:
            print(f"[INFO] Successfully uploaded private file to S3: s3://{bucket}/{key}")
        return response


def upload_file_to_s3(region, filepath, s3_bucket_name, public_read=True):
    """Upload a file to an S3 bucket.

    Args:
        region: AWS region where the bucket is hosted
        filepath: Local path of the file to upload
        s3_bucket_name: Name of the bucket
        public_read: Make the object publicly readable, defaults to True

    Returns:
        The response from the S3 service

    Example:
        >>> upload_file_to_s3('us-east-1', './data/image.png', 'my-s3-bucket')  # doctest: +SKIP
    """
    return S3Storage(region=region).upload_file(filepath, s3_bucket_name, public_read)
