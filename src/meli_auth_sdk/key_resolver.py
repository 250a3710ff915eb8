"""
Resolution of the KMS key used to decrypt Mercadolibre credentials.
"""
import logging
from typing import Any, Optional, Protocol

from .config import config as default_config_store
from .errors import ErrorCode, MeliAuthSdkError
from .types import mask_sensitive

logger = logging.getLogger(__name__)

KMS_ARN_FIELD = "kmsArn"


class ConfigProvider(Protocol):
    """Anything exposing get(field_name) -> value, e.g. ConfigStore."""

    def get(self, key: str) -> Optional[Any]:
        ...


class KeyResolver:
    """Reads the KMS key ARN from a configuration provider."""

    kms_arn_field = KMS_ARN_FIELD

    def __init__(
        self,
        config_provider: Optional[ConfigProvider] = None,
        field_name: str = KMS_ARN_FIELD,
    ) -> None:
        if config_provider is None:
            config_provider = default_config_store
        self._config_provider = config_provider
        self._field_name = field_name

    @property
    def field_name(self) -> str:
        return self._field_name

    def resolve_key(self) -> str:
        """
        Get the KMS ARN from the configuration provider.

        Returns:
            The KMS key ARN

        Raises:
            MeliAuthSdkError: ARN_NOT_FOUND if the setting is missing or empty
        """
        key_arn = self._config_provider.get(self._field_name)
        if not key_arn:
            logger.error(
                f"KeyResolver.resolve_key: Missing kms config setting '{self._field_name}'"
            )
            raise MeliAuthSdkError(
                f"Missing kms config setting '{self._field_name}'",
                ErrorCode.ARN_NOT_FOUND,
            )

        logger.debug(f"KeyResolver.resolve_key: Resolved key {mask_sensitive(str(key_arn), 20)}")
        return key_arn
