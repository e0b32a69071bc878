"""
Global pytest configuration for all tests.

Provides shared fixtures to prevent test isolation issues.
"""

import pytest


@pytest.fixture(scope="function", autouse=True)
def aws_credentials(monkeypatch):
    """
    Set mock AWS credentials for all tests.

    This prevents boto3 from looking for real credentials and ensures
    consistent environment across all test modules.
    """
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'ap-southeast-1')
    monkeypatch.delenv('AWS_REGION', raising=False)
    monkeypatch.delenv('AWS_ENDPOINT_URL', raising=False)
    yield
