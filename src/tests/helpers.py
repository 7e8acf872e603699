import io
import stat
import zipfile

from botocore.exceptions import ClientError

JOB_ID = "11111111-abcd-1111-abcd-111111abcdef"
BUCKET = "codepipeline-us-east-1-artifacts"
KEY = "infra-pipeline/merged/abc123.zip"

VALID_TEMPLATE = """AWSTemplateFormatVersion: "2010-09-09"
Description: Artifact bucket
Parameters:
  BucketName:
    Type: String
Resources:
  Bucket:
    Type: AWS::S3::Bucket
    Properties:
      BucketName: !Ref BucketName
"""


def make_zip(entries) -> bytes:
    """
    entries: iterable of (name, data, mode).
    mode=None writes an MS-DOS style entry whose high 16 bits carry no unix mode.
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, data, mode in entries:
            info = zipfile.ZipInfo(name)
            info.compress_type = zipfile.ZIP_DEFLATED
            is_dir = name.endswith("/")
            if mode is None:
                # writestr stamps 0o600 on a zero external_attr, so set the dos bits instead
                info.create_system = 0
                info.external_attr = 0x10 if is_dir else 0x20
            elif is_dir:
                info.external_attr = ((stat.S_IFDIR | mode) << 16) | 0x10
            else:
                info.external_attr = (stat.S_IFREG | mode) << 16
            zf.writestr(info, data)
    return buf.getvalue()


def make_event(job_id=JOB_ID, artifacts=None, credentials=None, user_parameters=None):
    if artifacts is None:
        artifacts = [{
            "name": "merged",
            "revision": None,
            "location": {"type": "S3", "s3Location": {"bucketName": BUCKET, "objectKey": KEY}},
        }]
    if credentials is None:
        credentials = {"accessKeyId": "AKIAEXAMPLE", "secretAccessKey": "SECRETKEY", "sessionToken": "SESSIONTOKEN"}
    configuration = {"FunctionName": "cfn-validate"}
    if user_parameters is not None:
        configuration["UserParameters"] = user_parameters
    return {
        "CodePipeline.job": {
            "id": job_id,
            "accountId": "111111111111",
            "data": {
                "actionConfiguration": {"configuration": configuration},
                "inputArtifacts": artifacts,
                "outputArtifacts": [],
                "artifactCredentials": credentials,
            },
        }
    }


class FakeCodePipeline:
    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = fail_on or set()

    def _record(self, op, kwargs):
        self.calls.append((op, kwargs))
        if op in self.fail_on:
            raise ClientError({"Error": {"Code": "JobNotFoundException", "Message": "job gone"}}, op)
        return {"ResponseMetadata": {"HTTPStatusCode": 200}}

    def put_job_success_result(self, **kwargs):
        return self._record("PutJobSuccessResult", kwargs)

    def put_job_failure_result(self, **kwargs):
        return self._record("PutJobFailureResult", kwargs)

    def ops(self):
        return [op for op, _ in self.calls]


class FakeCloudFormation:
    def __init__(self, error_message=None):
        self.bodies = []
        self.error_message = error_message

    def validate_template(self, TemplateBody):
        self.bodies.append(TemplateBody)
        if self.error_message:
            raise ClientError({"Error": {"Code": "ValidationError", "Message": self.error_message}}, "ValidateTemplate")
        return {
            "Parameters": [{"ParameterKey": "BucketName", "NoEcho": False, "Description": ""}],
            "Description": "Artifact bucket",
            "Capabilities": [],
            "ResponseMetadata": {"HTTPStatusCode": 200},
        }
