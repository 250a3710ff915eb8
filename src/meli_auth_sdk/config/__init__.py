from .types import (
    AwsConfig,
    CredentialServiceConfig,
    SdkConfig,
)
from .config_store import (
    config,
    ConfigStore,
    LoadResult,
)
from .env_store import (
    env,
    EnvStore,
)
