# src/lambdas/cfn_validate/aws_clients.py
import os, boto3
from botocore.config import Config

# one attempt per call, the pipeline decides whether to rerun the action
_NO_RETRY = Config(retries={"max_attempts": 1, "mode": "standard"})

def _region() -> str:
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or "us-east-1"

def s3(access_key_id: str, secret_access_key: str, session_token: str):
    kwargs = {
        "region_name": _region(),
        "aws_access_key_id": access_key_id,
        "aws_secret_access_key": secret_access_key,
        "aws_session_token": session_token,
        "config": _NO_RETRY.merge(Config(signature_version="s3v4")),
    }
    ep = os.environ.get("AWS_ENDPOINT_URL_S3")
    if ep: kwargs["endpoint_url"] = ep
    return boto3.client("s3", **kwargs)

def cloudformation():
    return boto3.client("cloudformation", region_name=_region(), config=_NO_RETRY)

def codepipeline():
    return boto3.client("codepipeline", region_name=_region(), config=_NO_RETRY)
