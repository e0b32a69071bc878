"""Handler configuration read from the Lambda environment."""
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError


class HandlerConfig(BaseModel):
    """Settings for the nodegroup tagging handler."""

    region: Optional[str] = Field(default=None, description="AWS region for EKS and AutoScaling clients")
    endpoint_url: Optional[str] = Field(default=None, description="Endpoint override, e.g. for LocalStack")

    @field_validator("endpoint_url")
    @classmethod
    def _absolute_url(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.startswith(("http://", "https://")):
            raise ValueError("endpoint_url must start with http:// or https://")
        return value


def get_config(environ: Optional[Mapping[str, str]] = None) -> HandlerConfig:
    """Build the handler configuration from environment variables.

    Reads AWS_REGION (falling back to AWS_DEFAULT_REGION) and
    AWS_ENDPOINT_URL. Empty values count as unset. The log level is read
    separately by setup_logger from LOG_LEVEL.

    Args:
        environ: Mapping to read instead of os.environ

    Returns:
        HandlerConfig instance

    Raises:
        ConfigurationError: If a value fails validation
    """
    env = os.environ if environ is None else environ

    values = {
        "region": env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or None,
        "endpoint_url": env.get("AWS_ENDPOINT_URL") or None,
    }

    try:
        return HandlerConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {str(e)}")
