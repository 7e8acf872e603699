import logging
import os

from botocore.exceptions import BotoCoreError, ClientError

from src.lambdas.cfn_validate import aws_clients
from src.lambdas.cfn_validate.errors import ArtifactDownloadError

logger = logging.getLogger(__name__)

class S3Handler:
    """Reads pipeline artifacts from S3 with the job-scoped credentials CodePipeline hands out."""

    def __init__(self, bucket_name, access_key_id, secret_access_key, session_token):
        self.bucket_name = bucket_name
        self.s3 = aws_clients.s3(access_key_id, secret_access_key, session_token)
        logger.info(f"S3Handler initialized for bucket: {self.bucket_name}")

    @classmethod
    def for_job(cls, job):
        creds = job.credentials
        return cls(job.artifact.bucket, creds.access_key_id, creds.secret_access_key, creds.session_token)

    def download_file(self, key: str, local_path: str) -> str:
        """Streams s3://bucket/key into local_path and returns the path."""
        logger.info(f"Downloading object from s3://{self.bucket_name}/{key} to {local_path}")
        try:
            with open(local_path, "wb") as f:
                self.s3.download_fileobj(self.bucket_name, key, f)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in ("NoSuchKey", "404", "NoSuchBucket"):
                logger.warning(f"Object not found: s3://{self.bucket_name}/{key}")
                raise ArtifactDownloadError(f"artifact not found: s3://{self.bucket_name}/{key}") from e
            logger.error(f"AWS ClientError downloading from S3: {e}", exc_info=True)
            raise ArtifactDownloadError(f"Failed to retrieve {key} from bucket {self.bucket_name}") from e
        except (BotoCoreError, OSError) as e:
            logger.error(f"Unexpected error downloading {key} from S3: {e}", exc_info=True)
            raise ArtifactDownloadError(f"Failed to retrieve {key} from bucket {self.bucket_name}: {e}") from e

        logger.info("Downloaded %d bytes from s3://%s/%s", os.path.getsize(local_path), self.bucket_name, key)
        return local_path
