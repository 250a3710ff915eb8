"""
Value types flowing through the token resolution pipeline.

Every value here lives for a single resolve_token() call and is never
persisted or shared between calls.
"""
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union


SellerId = Union[str, int]


def mask_sensitive(value: Optional[str], visible_chars: int = 10) -> str:
    """Mask sensitive values for safe logging."""
    if value is None:
        return "<None>"
    if not isinstance(value, str):
        return "<invalid-type>"
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


@dataclass(frozen=True)
class ResolutionRequest:
    """
    Caller input for one token resolution.

    Attributes:
        tenant_name: Janis client (tenant) on whose behalf the token is requested
        seller_id: Mercadolibre seller account identifier
    """

    tenant_name: str
    seller_id: SellerId


@dataclass(frozen=True)
class EncryptedCredentialEnvelope:
    """
    Encrypted credentials returned by the credential service.

    Attributes:
        seller_id: Seller the credentials belong to
        ciphertext: KMS encrypted credentials blob
        expires_in: Expiration date of the credentials in ISO 8601 format
    """

    seller_id: SellerId
    ciphertext: str
    expires_in: str

    def __repr__(self) -> str:
        return (
            f"EncryptedCredentialEnvelope(seller_id={self.seller_id!r}, "
            f"ciphertext={mask_sensitive(self.ciphertext)!r}, "
            f"expires_in={self.expires_in!r})"
        )


@dataclass(frozen=True)
class DecryptedCredentials:
    """
    Mercadolibre credentials after decryption.

    Attributes:
        access_token: Mercadolibre access token
        refresh_token: Token used to get a new access token
    """

    access_token: str
    refresh_token: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DecryptedCredentials":
        """Build from the decrypted payload (camelCase keys)."""
        return cls(
            access_token=data["accessToken"],
            refresh_token=data.get("refreshToken"),
        )

    def __repr__(self) -> str:
        return (
            f"DecryptedCredentials(access_token={mask_sensitive(self.access_token)!r}, "
            f"refresh_token={mask_sensitive(self.refresh_token)!r})"
        )


@dataclass(frozen=True)
class ResolvedToken:
    """
    Result of a successful token resolution.

    Attributes:
        access_token: Mercadolibre access token
        expires_in: Expiration date reported by the credential service
    """

    access_token: str
    expires_in: str

    def to_dict(self) -> Dict[str, str]:
        """Render the wire shape: {accessToken, expiresIn}."""
        return {
            "accessToken": self.access_token,
            "expiresIn": self.expires_in,
        }

    def __repr__(self) -> str:
        return (
            f"ResolvedToken(access_token={mask_sensitive(self.access_token)!r}, "
            f"expires_in={self.expires_in!r})"
        )
