"""
Requester for the meli-auth credential service.

Performs exactly one GET per call and validates the response shape
before handing back an EncryptedCredentialEnvelope.
"""
import logging
from typing import Any, Dict, Optional

from .config import ConfigStore, CredentialServiceConfig, EnvStore, SdkConfig, config, env
from .errors import ErrorCode, MeliAuthSdkError
from .fetch_client import AsyncFetchClient, ClientConfig, FetchResponse
from .types import EncryptedCredentialEnvelope, SellerId

logger = logging.getLogger(__name__)

SUCCESS_STATUS = 200
REMOTE_REQUEST_FAIL_MESSAGE = "Remote request to Mercadolibre authorization service failed"
MALFORMED_RESPONSE_MESSAGE = "Malformed response from Mercadolibre authorization service"


class CredentialFetcher:
    """
    Fetches encrypted seller credentials from the meli-auth service.

    Args:
        client: Caller-owned AsyncFetchClient. When omitted a client is
            opened and closed for every call.
        service_config: Fixed credential service settings. When omitted
            they are read from config_store on every call, so settings
            loaded after construction are honoured.
        config_store: Settings source (default: the ConfigStore singleton)
        env_store: Store used to resolve service_config.env_base_url
    """

    def __init__(
        self,
        client: Optional[AsyncFetchClient] = None,
        service_config: Optional[CredentialServiceConfig] = None,
        config_store: Optional[ConfigStore] = None,
        env_store: Optional[EnvStore] = None,
    ) -> None:
        self._client = client
        self._service = service_config
        self._config_store = config_store if config_store is not None else config
        self._env = env_store if env_store is not None else env

    def _service_config(self) -> CredentialServiceConfig:
        if self._service is not None:
            return self._service
        sdk_config = self._config_store.get_config() or SdkConfig()
        return sdk_config.meli_auth

    def _build_client_config(self, service: CredentialServiceConfig) -> ClientConfig:
        base_url = service.base_url or self._env.get(service.env_base_url)
        return ClientConfig(
            base_url=base_url or "",
            timeout=service.timeout_seconds,
        )

    async def _call(
        self,
        service: CredentialServiceConfig,
        headers: Dict[str, str],
        query: Dict[str, Any],
    ) -> FetchResponse:
        if self._client is not None:
            return await self._client.get(service.path, headers=headers, query=query)

        async with AsyncFetchClient(self._build_client_config(service)) as client:
            return await client.get(service.path, headers=headers, query=query)

    async def fetch_credentials(
        self, tenant_name: str, seller_id: SellerId
    ) -> EncryptedCredentialEnvelope:
        """
        Request the encrypted credentials of a seller.

        Args:
            tenant_name: Janis client name, sent as routing header
            seller_id: Mercadolibre seller id, sent as query parameter

        Returns:
            EncryptedCredentialEnvelope with ciphertext and expiration

        Raises:
            MeliAuthSdkError: REMOTE_REQUEST_FAIL, CREDENTIALS_NOT_FOUND or
                MALFORMED_RESPONSE
        """
        service = self._service_config()
        headers = {service.client_header: tenant_name}
        query = {service.seller_param: seller_id}

        logger.debug(
            f"CredentialFetcher.fetch_credentials: Requesting credentials "
            f"tenant='{tenant_name}', seller='{seller_id}'"
        )

        try:
            response = await self._call(service, headers, query)
        except Exception as e:
            logger.error(f"CredentialFetcher.fetch_credentials: Request raised: {e}")
            raise MeliAuthSdkError(
                f"{REMOTE_REQUEST_FAIL_MESSAGE} -> {e}",
                ErrorCode.REMOTE_REQUEST_FAIL,
                cause=e,
            ) from e

        body = response.get("data")
        status = response.get("status")

        if body is None or body == "":
            logger.error(
                f"CredentialFetcher.fetch_credentials: Empty response body (status={status})"
            )
            raise MeliAuthSdkError(
                f"{REMOTE_REQUEST_FAIL_MESSAGE} -> empty response body",
                ErrorCode.REMOTE_REQUEST_FAIL,
            )

        if status != SUCCESS_STATUS:
            logger.error(f"CredentialFetcher.fetch_credentials: Unexpected status {status}")
            raise MeliAuthSdkError(
                f"{REMOTE_REQUEST_FAIL_MESSAGE} -> status code {status}",
                ErrorCode.REMOTE_REQUEST_FAIL,
            )

        if not isinstance(body, dict):
            logger.error(
                f"CredentialFetcher.fetch_credentials: Body is not an object "
                f"(got {type(body).__name__})"
            )
            raise MeliAuthSdkError(MALFORMED_RESPONSE_MESSAGE, ErrorCode.MALFORMED_RESPONSE)

        credentials = body.get("credentials")
        if not credentials:
            logger.warning(
                f"CredentialFetcher.fetch_credentials: No credentials for seller '{seller_id}'"
            )
            raise MeliAuthSdkError(
                f"No credentials found for seller: {seller_id}",
                ErrorCode.CREDENTIALS_NOT_FOUND,
            )

        expires_in = body.get("expiresIn")
        if not expires_in or not isinstance(credentials, str):
            logger.error(
                f"CredentialFetcher.fetch_credentials: Malformed response "
                f"has_expires_in={bool(expires_in)}, "
                f"credentials_type={type(credentials).__name__}"
            )
            raise MeliAuthSdkError(MALFORMED_RESPONSE_MESSAGE, ErrorCode.MALFORMED_RESPONSE)

        return EncryptedCredentialEnvelope(
            seller_id=body.get("seller") or seller_id,
            ciphertext=credentials,
            expires_in=str(expires_in),
        )
