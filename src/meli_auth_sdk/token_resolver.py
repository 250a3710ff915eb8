"""
Mercadolibre access token resolution.

Resolution order, each step consuming the previous one's output:
1. Validate tenant name and seller id
2. Read the KMS key ARN from settings (KeyResolver)
3. Fetch the encrypted credentials from meli-auth (CredentialFetcher)
4. Decrypt them with KMS (CredentialDecryptor)

Any failure stops the pipeline with a MeliAuthSdkError. Nothing is cached
or retried; callers own both policies.
"""
import logging
from typing import Dict, Optional

from .config import ConfigStore, SdkConfig, config
from .credential_fetcher import CredentialFetcher
from .decryptor import CredentialDecryptor, KmsDecryptionProvider
from .errors import ErrorCode, MeliAuthSdkError
from .key_resolver import ConfigProvider, KeyResolver
from .types import ResolutionRequest, ResolvedToken, SellerId, mask_sensitive

logger = logging.getLogger(__name__)


class TokenResolver:
    """
    Composes KeyResolver -> CredentialFetcher -> CredentialDecryptor.

    Collaborators not given read their settings from config_store (the
    ConfigStore singleton by default) on every resolution, so a resolver
    built before the settings are loaded picks them up later.
    """

    def __init__(
        self,
        key_resolver: Optional[KeyResolver] = None,
        fetcher: Optional[CredentialFetcher] = None,
        decryptor: Optional[CredentialDecryptor] = None,
        config_store: Optional[ConfigStore] = None,
    ) -> None:
        self._config_store = config_store if config_store is not None else config

        if key_resolver is None:
            key_resolver = KeyResolver(self._config_store)
        if fetcher is None:
            fetcher = CredentialFetcher(config_store=self._config_store)
        if decryptor is None:
            decryptor = CredentialDecryptor(self._kms_provider)

        self._key_resolver = key_resolver
        self._fetcher = fetcher
        self._decryptor = decryptor

    def _kms_provider(self, key_id: str) -> KmsDecryptionProvider:
        sdk_config = self._config_store.get_config() or SdkConfig()
        return KmsDecryptionProvider(key_id, aws_config=sdk_config.aws)

    @classmethod
    def from_config_provider(cls, config_provider: ConfigProvider) -> "TokenResolver":
        """Build a resolver whose key ARN comes from any get(key) provider."""
        return cls(key_resolver=KeyResolver(config_provider))

    @staticmethod
    def _validate(tenant_name: Optional[str], seller_id: Optional[SellerId]) -> ResolutionRequest:
        if not tenant_name:
            logger.error("TokenResolver.resolve_token: Invalid clientName")
            raise MeliAuthSdkError("Invalid clientName", ErrorCode.INVALID_CLIENT_NAME)

        if not seller_id:
            logger.error("TokenResolver.resolve_token: Invalid sellerId")
            raise MeliAuthSdkError("Invalid sellerId", ErrorCode.INVALID_SELLER_ID)

        return ResolutionRequest(tenant_name=tenant_name, seller_id=seller_id)

    async def resolve_token(
        self,
        tenant_name: Optional[str],
        seller_id: Optional[SellerId],
    ) -> ResolvedToken:
        """
        Resolve the Mercadolibre access token of a seller.

        Args:
            tenant_name: Janis client name
            seller_id: Mercadolibre seller id

        Returns:
            ResolvedToken with the access token and its expiration

        Raises:
            MeliAuthSdkError: Classified failure of whichever step failed
        """
        request = self._validate(tenant_name, seller_id)
        logger.debug(
            f"TokenResolver.resolve_token: Resolving token "
            f"tenant='{request.tenant_name}', seller='{request.seller_id}'"
        )

        key_id = self._key_resolver.resolve_key()
        envelope = await self._fetcher.fetch_credentials(request.tenant_name, request.seller_id)
        decrypted = await self._decryptor.decrypt(key_id, envelope)

        token = ResolvedToken(
            access_token=decrypted.access_token,
            expires_in=envelope.expires_in,
        )
        logger.info(
            f"TokenResolver.resolve_token: Token resolved for seller '{request.seller_id}' "
            f"(token={mask_sensitive(token.access_token)}, expires_in={token.expires_in})"
        )
        return token


async def get_access_token(
    client_name: Optional[str],
    seller_id: Optional[SellerId],
) -> Dict[str, str]:
    """
    Resolve a token with the default wiring and return the wire shape.

    Args:
        client_name: Janis client name
        seller_id: Mercadolibre seller id

    Returns:
        {"accessToken": str, "expiresIn": str}
    """
    resolver = TokenResolver()
    token = await resolver.resolve_token(client_name, seller_id)
    return token.to_dict()
