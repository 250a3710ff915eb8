"""
Mercadolibre access token resolution for Janis clients.

This package provides:
- token_resolver: TokenResolver pipeline and get_access_token()
- key_resolver: KMS key ARN lookup from settings
- credential_fetcher: meli-auth credential service requester
- decryptor: KMS decryption of seller credentials
- errors: MeliAuthSdkError and its ErrorCode taxonomy
- config: YAML settings store and .env store
"""
from .errors import ErrorCode, MeliAuthSdkError
from .types import (
    DecryptedCredentials,
    EncryptedCredentialEnvelope,
    ResolutionRequest,
    ResolvedToken,
    mask_sensitive,
)
from .key_resolver import KMS_ARN_FIELD, ConfigProvider, KeyResolver
from .credential_fetcher import CredentialFetcher
from .decryptor import (
    CredentialDecryptor,
    DecryptionProvider,
    KmsDecryptionProvider,
)
from .token_resolver import TokenResolver, get_access_token

__all__ = [
    # Errors
    "ErrorCode",
    "MeliAuthSdkError",
    # Types
    "DecryptedCredentials",
    "EncryptedCredentialEnvelope",
    "ResolutionRequest",
    "ResolvedToken",
    "mask_sensitive",
    # Pipeline steps
    "KMS_ARN_FIELD",
    "ConfigProvider",
    "KeyResolver",
    "CredentialFetcher",
    "CredentialDecryptor",
    "DecryptionProvider",
    "KmsDecryptionProvider",
    # Orchestrator
    "TokenResolver",
    "get_access_token",
]

__version__ = "1.0.0"
