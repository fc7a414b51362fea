"""S3 storage for person thumbnails."""
import boto3
from botocore.client import Config
from botocore.exceptions import ClientError, BotoCoreError
import logging

from photo_people.app.config import settings
from photo_people.core.errors import NotFoundError, StorageError
from .base import ReadStream, StorageRepository

logger = logging.getLogger(__name__)


class S3StorageRepository(StorageRepository):
    """Blob reader backed by an S3 bucket; paths are object keys."""

    def __init__(self, s3_client=None, bucket_name: str = None):
        """Initialize S3 client with configuration."""
        if s3_client is not None:
            self.s3_client = s3_client
        else:
            try:
                self.s3_client = boto3.client(
                    's3',
                    aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                    aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                    region_name=settings.S3_REGION,
                    endpoint_url=settings.S3_ENDPOINT_URL,
                    config=Config(
                        signature_version='s3v4',
                        s3={'addressing_style': 'virtual'}
                    )
                )
            except (BotoCoreError, ValueError) as e:
                logger.error(f"Failed to initialize S3 client: {e}")
                raise StorageError(f"S3 initialization failed: {str(e)}")
        self.bucket_name = bucket_name or settings.S3_BUCKET_NAME
        logger.info(f"S3 storage initialized for bucket: {self.bucket_name}")

    def open_read_stream(self, path: str, content_type: str) -> ReadStream:
        """
        Open a stored object for streaming.

        Args:
            path: S3 object key
            content_type: MIME type reported to the client

        Returns:
            ReadStream over the object body

        Raises:
            NotFoundError: If the object does not exist
            StorageError: If S3 fails otherwise
        """
        try:
            response = self.s3_client.get_object(
                Bucket=self.bucket_name,
                Key=path
            )
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code', '')
            if error_code in ('NoSuchKey', '404'):
                raise NotFoundError(f"Object not found: {path}")
            logger.error(f"Error opening {path}: {e}")
            raise StorageError(f"Failed to open file: {str(e)}")
        except BotoCoreError as e:
            logger.error(f"Unexpected error opening {path}: {e}")
            raise StorageError(f"Unexpected error: {str(e)}")

        logger.debug(f"Opened read stream for: {path}")
        return ReadStream(
            stream=response['Body'],
            content_type=content_type,
            length=response.get('ContentLength'),
        )
