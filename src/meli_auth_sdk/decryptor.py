"""
Decryption of the credentials returned by the meli-auth service.

KmsDecryptionProvider talks to AWS KMS; CredentialDecryptor turns whatever
the provider does into either DecryptedCredentials or TOKEN_NOT_FOUND.
"""
import asyncio
import base64
import json
import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional, Protocol

import boto3
from botocore.config import Config

from .config import AwsConfig, EnvStore, env
from .errors import ErrorCode, MeliAuthSdkError
from .types import DecryptedCredentials, EncryptedCredentialEnvelope, mask_sensitive

logger = logging.getLogger(__name__)


class DecryptionProvider(Protocol):
    """Decrypts a ciphertext with a key fixed at construction time."""

    async def decrypt(self, ciphertext: str) -> Optional[Mapping]:
        ...


DecryptionProviderFactory = Callable[[str], DecryptionProvider]


class KmsDecryptionProvider:
    """
    AWS KMS decryption of base64 encoded, JSON serialized payloads.

    Args:
        key_arn: ARN of the KMS key used to encrypt the payload
        region_name: AWS region, overrides aws_config
        kms_client: Pre-built boto3 KMS client (mainly for tests)
        aws_config: Region settings; aws_config.env_region names the
            environment fallback
        env_store: Store used to resolve the environment fallback
    """

    def __init__(
        self,
        key_arn: str,
        region_name: Optional[str] = None,
        kms_client: Optional[Any] = None,
        aws_config: Optional[AwsConfig] = None,
        env_store: Optional[EnvStore] = None,
    ) -> None:
        self.key_arn = key_arn
        if kms_client is None:
            aws = aws_config if aws_config is not None else AwsConfig()
            env_source = env_store if env_store is not None else env
            region = region_name or aws.region or env_source.get(aws.env_region)
            client_kwargs = {
                "service_name": "kms",
                "config": Config(retries={"total_max_attempts": 1}),
            }
            if region:
                client_kwargs["region_name"] = region
            kms_client = boto3.client(**client_kwargs)
        self._kms = kms_client

    def _decrypt_sync(self, ciphertext: str) -> Optional[Mapping]:
        response = self._kms.decrypt(
            CiphertextBlob=base64.b64decode(ciphertext),
            KeyId=self.key_arn,
        )
        plaintext = response["Plaintext"]
        if isinstance(plaintext, bytes):
            plaintext = plaintext.decode("utf-8")

        payload = json.loads(plaintext)
        if not isinstance(payload, Mapping):
            logger.warning(
                f"KmsDecryptionProvider.decrypt: Plaintext is not an object "
                f"(got {type(payload).__name__})"
            )
            return None
        return payload

    async def decrypt(self, ciphertext: str) -> Optional[Mapping]:
        """
        Decrypt a KMS ciphertext.

        Args:
            ciphertext: Base64 encoded KMS ciphertext blob

        Returns:
            Decoded JSON object, or None when the plaintext is not an object
        """
        logger.debug(
            f"KmsDecryptionProvider.decrypt: Decrypting {mask_sensitive(ciphertext)} "
            f"with key {mask_sensitive(self.key_arn, 20)}"
        )
        # boto3 is blocking
        return await asyncio.to_thread(self._decrypt_sync, ciphertext)


class CredentialDecryptor:
    """
    Decrypts an EncryptedCredentialEnvelope into DecryptedCredentials.

    Args:
        provider_factory: Builds a DecryptionProvider for a key id
    """

    def __init__(
        self, provider_factory: Optional[DecryptionProviderFactory] = None
    ) -> None:
        if provider_factory is None:
            provider_factory = KmsDecryptionProvider
        self._provider_factory = provider_factory

    async def decrypt(
        self, key_id: str, envelope: EncryptedCredentialEnvelope
    ) -> DecryptedCredentials:
        """
        Decrypt the credentials of a seller.

        A raising provider, an empty result and a result without accessToken
        are all reported the same way.

        Args:
            key_id: KMS key ARN
            envelope: Response of the credential service

        Returns:
            DecryptedCredentials with a non-empty access token

        Raises:
            MeliAuthSdkError: TOKEN_NOT_FOUND
        """
        message = f"No token found for seller: {envelope.seller_id}"

        try:
            provider = self._provider_factory(key_id)
            result = await provider.decrypt(envelope.ciphertext)
        except Exception as e:
            logger.error(f"CredentialDecryptor.decrypt: Decryption failed: {e}")
            raise MeliAuthSdkError(message, ErrorCode.TOKEN_NOT_FOUND, cause=e) from e

        if not isinstance(result, Mapping) or not result.get("accessToken"):
            logger.error(
                f"CredentialDecryptor.decrypt: No access token in decrypted data "
                f"for seller '{envelope.seller_id}' (has_result={result is not None})"
            )
            raise MeliAuthSdkError(message, ErrorCode.TOKEN_NOT_FOUND)

        return DecryptedCredentials.from_mapping(result)
