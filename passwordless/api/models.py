import base64
import binascii
from datetime import datetime
from typing import Any, Optional
from urllib.parse import quote, urlencode
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def decode_base64_value(value):
    """
    Decode a binary field as sent by the service.

    Accepts standard base64 or base64url text with or without padding, a JSON
    array of byte values, or bytes that are already decoded.
    """
    if value is None or isinstance(value, bytes):
        return value
    if isinstance(value, list):
        try:
            return bytes(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid byte array: {e}")
    if isinstance(value, str):
        normalized = value.strip().replace("-", "+").replace("_", "/")
        normalized += "=" * (-len(normalized) % 4)
        try:
            return base64.b64decode(normalized, validate=True)
        except binascii.Error:
            raise ValueError(f"Invalid base64 value: {value}")
    raise ValueError(f"Expected base64 string or byte array, got {type(value)}")


def require_non_blank(value: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("must be a non-empty string")
    return value


class PasswordlessModel(BaseModel):
    """
    Base model for everything that crosses the wire.

    Field aliases hold the PascalCase wire names. Incoming keys are matched
    case-insensitively against both aliases and field names, so "Success",
    "success" and "SUCCESS" all populate the same field.
    """

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def match_keys_case_insensitively(cls, data):
        if not isinstance(data, dict):
            return data

        known = {}
        for name, field in cls.model_fields.items():
            alias = field.alias or name
            known[alias.lower()] = alias
            known[name.lower()] = alias

        return {
            (known.get(key.lower(), key) if isinstance(key, str) else key): value
            for key, value in data.items()
        }


# Response models


class SignInTokenVerificationResult(PasswordlessModel):
    """Outcome of verifying a sign-in token. `success` may be False on HTTP 200."""

    model_config = ConfigDict(extra="allow")

    success: bool = Field(..., alias="Success", description="Whether the token verified")
    username: Optional[str] = Field(None, alias="Username", description="Signed-in user")
    expires_at: Optional[datetime] = Field(
        None, alias="ExpiresAt", description="When the verified token expires"
    )
    timestamp: Optional[datetime] = Field(
        None, alias="Timestamp", description="When the sign-in happened"
    )
    rpid: Optional[str] = Field(None, alias="RPID", description="Relying party ID")
    origin: Optional[str] = Field(None, alias="Origin", description="Origin of the ceremony")
    device: Optional[str] = Field(None, alias="Device", description="Device description")
    country: Optional[str] = Field(None, alias="Country", description="Country code")
    nickname: Optional[str] = Field(None, alias="Nickname", description="Credential nickname")


class StoredCredential(PasswordlessModel):
    """One authenticator registered for a user. Read-only on the client side."""

    model_config = ConfigDict(extra="allow", ser_json_bytes="base64")

    descriptor: Optional[dict[str, Any]] = Field(
        None, alias="Descriptor", description="Provider-defined credential descriptor"
    )
    user_id: Optional[bytes] = Field(None, alias="UserId", description="User ID")
    public_key: Optional[bytes] = Field(None, alias="PublicKey", description="Public key")
    user_handle: Optional[bytes] = Field(None, alias="UserHandle", description="User handle")
    signature_counter: int = Field(
        0, alias="SignatureCounter", ge=0, description="Authenticator signature counter"
    )
    cred_type: Optional[str] = Field(None, alias="CredType", description="Credential type")
    created_at: Optional[datetime] = Field(None, alias="CreatedAt")
    aa_guid: Optional[UUID] = Field(
        None, alias="AaGuid", description="Authenticator attestation GUID"
    )
    last_used_at: Optional[datetime] = Field(None, alias="LastUsedAt")
    rpid: Optional[str] = Field(None, alias="RPID", description="Relying party ID")
    origin: Optional[str] = Field(None, alias="Origin")
    country: Optional[str] = Field(None, alias="Country")
    device: Optional[str] = Field(None, alias="Device")
    nickname: Optional[str] = Field(None, alias="Nickname")

    @field_validator("user_id", "public_key", "user_handle", mode="before")
    @classmethod
    def decode_binary_fields(cls, v):
        return decode_base64_value(v)

    @property
    def credential_id(self) -> Optional[str]:
        """The `id` member of the descriptor, if the service sent one."""
        if not self.descriptor:
            return None
        for key, value in self.descriptor.items():
            if key.lower() == "id":
                return value
        return None


# Request models


class RegistrationTokenRequest(PasswordlessModel):
    """Parameters for issuing a registration token for `username`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    username: str = Field(..., alias="Username", description="User to register")
    display_name: str = Field("Test", alias="Displayname", description="Display name")
    att_type: str = Field("None", alias="AttType", description="Attestation type")
    auth_type: Optional[str] = Field(
        None, alias="AuthType", description="Authenticator attachment type"
    )
    require_resident_key: bool = Field(False, alias="RequireResidentKey")
    user_verification: str = Field(
        "Preferred", alias="UserVerification", description="User verification policy"
    )

    @field_validator("username", mode="before")
    @classmethod
    def validate_username(cls, v):
        return require_non_blank(v)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class VerifySignInTokenRequest(PasswordlessModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    token: str = Field(..., alias="Token", description="Token from the sign-in flow")

    @field_validator("token", mode="before")
    @classmethod
    def validate_token(cls, v):
        return require_non_blank(v)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class CredentialListQuery(PasswordlessModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    username: str = Field(..., alias="Username")

    @field_validator("username", mode="before")
    @classmethod
    def validate_username(cls, v):
        return require_non_blank(v)

    def to_query_string(self) -> str:
        """Percent-encoded query, e.g. `username=a%20b%26c`."""
        return urlencode({"username": self.username}, quote_via=quote)


class CredentialDeletionRequest(PasswordlessModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    credential_id: str = Field(..., alias="CredentialId")

    @field_validator("credential_id", mode="before")
    @classmethod
    def validate_credential_id(cls, v):
        return require_non_blank(v)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
