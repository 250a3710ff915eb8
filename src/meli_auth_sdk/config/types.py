"""Pydantic models for the SDK settings file."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CredentialServiceConfig(BaseModel):
    """Location and request shape of the meli-auth credential service.

    base_url wins over the env_base_url environment variable.
    """

    base_url: Optional[str] = None
    env_base_url: Optional[str] = "MELI_AUTH_BASE_URL"
    path: str = "/credential"
    client_header: str = "janis-client"
    seller_param: str = "seller"
    timeout_seconds: float = 30.0


class AwsConfig(BaseModel):
    """AWS settings used by the KMS decryption provider.

    region wins over the env_region environment variable.
    """

    region: Optional[str] = None
    env_region: Optional[str] = "AWS_REGION"


class SdkConfig(BaseModel):
    """Root model for sdk.{APP_ENV}.yaml files.

    The key ARN is only read from ``kmsArn``; KeyResolver looks the raw
    key up by that name.
    """

    model_config = ConfigDict(extra="allow")

    kms_arn: Optional[str] = Field(default=None, alias="kmsArn")
    meli_auth: CredentialServiceConfig = Field(default_factory=CredentialServiceConfig)
    aws: AwsConfig = Field(default_factory=AwsConfig)
