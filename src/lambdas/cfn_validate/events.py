# src/lambdas/cfn_validate/events.py
"""
Parsing of the CodePipeline job event.

CodePipeline invokes the function with:
{
  "CodePipeline.job": {
    "id": "11111111-abcd-1111-abcd-111111abcdef",
    "accountId": "111111111111",
    "data": {
      "actionConfiguration": {"configuration": {"FunctionName": "...", "UserParameters": "..."}},
      "inputArtifacts": [
        {"name": "merged", "location": {"type": "S3", "s3Location": {"bucketName": "...", "objectKey": "..."}}}
      ],
      "outputArtifacts": [],
      "artifactCredentials": {"accessKeyId": "...", "secretAccessKey": "...", "sessionToken": "..."}
    }
  }
}
"""
import json
import posixpath
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import InvalidEventError

JOB_KEY = "CodePipeline.job"


@dataclass(frozen=True)
class S3Location:
    bucket: str
    key: str


@dataclass(frozen=True)
class ArtifactCredentials:
    access_key_id: str
    secret_access_key: str
    session_token: str

    def __repr__(self) -> str:
        # keep secrets out of logs and tracebacks
        return f"ArtifactCredentials(access_key_id={self.access_key_id!r}, secret_access_key=***, session_token=***)"


@dataclass(frozen=True)
class PipelineJob:
    job_id: str
    artifact: S3Location
    credentials: ArtifactCredentials
    user_parameters: Dict[str, Any] = field(default_factory=dict)

    def template_path(self, default: str) -> str:
        return _safe_relative_path(self.user_parameters.get("TemplatePath") or default)


def _job(event: Dict[str, Any]) -> Dict[str, Any]:
    job = (event or {}).get(JOB_KEY) if isinstance(event, dict) else None
    if not isinstance(job, dict):
        raise InvalidEventError(f"event has no '{JOB_KEY}' object")
    return job


def job_id(event: Dict[str, Any]) -> str:
    jid = _job(event).get("id")
    if not jid:
        raise InvalidEventError("CodePipeline job has no id")
    return jid


def _artifact(data: Dict[str, Any]) -> S3Location:
    artifacts = data.get("inputArtifacts") or []
    if len(artifacts) != 1:
        raise InvalidEventError(f"expected exactly one input artifact, got {len(artifacts)}")
    s3loc = ((artifacts[0] or {}).get("location") or {}).get("s3Location") or {}
    bucket, key = s3loc.get("bucketName"), s3loc.get("objectKey")
    if not bucket or not key:
        raise InvalidEventError("input artifact has no S3 bucket/key")
    return S3Location(bucket=bucket, key=key)


def _credentials(data: Dict[str, Any]) -> ArtifactCredentials:
    creds = data.get("artifactCredentials") or {}
    missing = [k for k in ("accessKeyId", "secretAccessKey", "sessionToken") if not creds.get(k)]
    if missing:
        raise InvalidEventError(f"artifact credentials missing: {', '.join(missing)}")
    return ArtifactCredentials(
        access_key_id=creds["accessKeyId"],
        secret_access_key=creds["secretAccessKey"],
        session_token=creds["sessionToken"],
    )


def _user_parameters(data: Dict[str, Any]) -> Dict[str, Any]:
    raw: Optional[str] = ((data.get("actionConfiguration") or {}).get("configuration") or {}).get("UserParameters")
    if not raw or not raw.strip():
        return {}
    raw = raw.strip()
    if not raw.startswith("{"):
        # a bare string is taken as the template path
        return {"TemplatePath": raw}
    try:
        params = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidEventError(f"UserParameters is not valid JSON: {e}") from e
    if not isinstance(params, dict):
        raise InvalidEventError("UserParameters must be a JSON object")
    if "TemplatePath" in params and not isinstance(params["TemplatePath"], str):
        raise InvalidEventError("TemplatePath must be a string")
    return params


def _safe_relative_path(path: str) -> str:
    norm = posixpath.normpath(path.replace("\\", "/"))
    if posixpath.isabs(norm) or norm == ".." or norm.startswith("../"):
        raise InvalidEventError(f"template path must stay inside the artifact: {path!r}")
    return norm


def parse_job(event: Dict[str, Any]) -> PipelineJob:
    job = _job(event)
    data = job.get("data") or {}
    return PipelineJob(
        job_id=job_id(event),
        artifact=_artifact(data),
        credentials=_credentials(data),
        user_parameters=_user_parameters(data),
    )
