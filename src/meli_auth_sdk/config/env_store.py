"""
Environment fallbacks for settings the YAML file leaves unset.

The SDK only ever reads two variables through here: the credential
service base URL and the AWS region (see CredentialServiceConfig.env_base_url
and AwsConfig.env_region).
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class EnvStore:
    """Process environment lookups, optionally seeded from a .env file."""

    def load(self, dotenv_path: str, override: bool = False) -> bool:
        """
        Load a .env file into os.environ.

        Variables land in os.environ so boto3 picks up AWS credentials
        from the same file.

        Args:
            dotenv_path: Path to the .env file
            override: Whether file values replace variables already set

        Returns:
            True if at least one variable was set
        """
        loaded = load_dotenv(dotenv_path, override=override)
        if loaded:
            logger.info(f"EnvStore.load: Loaded env file {dotenv_path}")
        else:
            logger.warning(f"EnvStore.load: Nothing loaded from {dotenv_path}")
        return loaded

    def get(self, key: Optional[str]) -> Optional[str]:
        """Value of an environment variable; unset, empty and key=None all give None."""
        if not key:
            return None
        return os.environ.get(key) or None


env = EnvStore()
