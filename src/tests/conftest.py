import pytest

from src.tests.helpers import FakeCloudFormation, FakeCodePipeline


@pytest.fixture
def aws_env(monkeypatch):
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.delenv("AWS_ENDPOINT_URL_S3", raising=False)


@pytest.fixture
def codepipeline():
    return FakeCodePipeline()


@pytest.fixture
def cloudformation():
    return FakeCloudFormation()
