import json
from typing import List

import requests
from pydantic import TypeAdapter, ValidationError

from passwordless.api.exceptions import (
    DecodeError,
    HttpStatusError,
    PasswordlessValidationError,
    TransportError,
)
from passwordless.api.models import (
    CredentialDeletionRequest,
    CredentialListQuery,
    RegistrationTokenRequest,
    SignInTokenVerificationResult,
    StoredCredential,
    VerifySignInTokenRequest,
)
from passwordless.config.config import ClientConfig, Settings, get_settings
from passwordless.logger import get_logger
from passwordless.version import __version__

logger = get_logger()

SIGNIN_VERIFY_PATH = "signin/verify"
REGISTER_TOKEN_PATH = "register/token"
CREDENTIALS_LIST_PATH = "credentials/list"
CREDENTIALS_DELETE_PATH = "credentials/delete"

_verification_adapter = TypeAdapter(SignInTokenVerificationResult)
_credential_list_adapter = TypeAdapter(List[StoredCredential])


def _body_text(response) -> str:
    """
    Decode a successful response body as UTF-8, regardless of what the headers claim.

    Raises:
        DecodeError: the body is not valid UTF-8
    """
    try:
        return response.content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(
            "Response body is not valid UTF-8",
            response.content.decode("utf-8", errors="replace"),
        ) from e


def _failed_field(model_cls, error: ValidationError, default: str) -> str:
    """Python field name of the first validation error, mapped back from its wire alias."""
    errors = error.errors()
    if not errors or not errors[0]["loc"]:
        return default
    loc = str(errors[0]["loc"][0])
    for name, field in model_cls.model_fields.items():
        if loc in (name, field.alias):
            return name
    return loc


def _build_model(model_cls, field: str, **values):
    """Construct a request model, turning pydantic errors into PasswordlessValidationError."""
    try:
        return model_cls(**values)
    except ValidationError as e:
        failed = _failed_field(model_cls, e, field)
        raise PasswordlessValidationError(failed, f"Invalid {failed}: {e}") from e


class PasswordlessClient:
    """
    Client for the passwordless.dev API.

    The transport is anything with a `requests`-style
    `request(method, url, headers=..., data=...)` method: a `requests.Session`
    or the `requests` module itself (the default). The client only borrows it
    and never closes it.
    """

    def __init__(self, api_secret, api_url: str | None = None, transport=None):
        values = {"api_secret": api_secret}
        if api_url is not None:
            values["api_url"] = api_url
        try:
            self.config = ClientConfig(**values)
        except ValidationError as e:
            field = _failed_field(ClientConfig, e, "api_secret")
            raise PasswordlessValidationError(field, f"Invalid {field}") from e
        self.transport = transport if transport is not None else requests

    @classmethod
    def from_settings(cls, settings: Settings | None = None, transport=None):
        """Build a client from PASSWORDLESS_* environment configuration."""
        settings = settings or get_settings()
        if settings.api_secret is None:
            raise PasswordlessValidationError(
                "api_secret", "No API secret configured. Set PASSWORDLESS_API_SECRET."
            )
        return cls(settings.api_secret, api_url=settings.api_url, transport=transport)

    @property
    def api_url(self) -> str:
        return self.config.api_url

    def __repr__(self) -> str:
        return f"{type(self).__name__}(api_url={self.api_url!r})"

    def _headers(self, with_body: bool) -> dict:
        headers = {
            "ApiSecret": self.config.api_secret.get_secret_value(),
            "Accept": "application/json",
            "User-Agent": f"passwordless-client/{__version__}",
        }
        if with_body:
            headers["Content-Type"] = "application/json; charset=utf-8"
        return headers

    def _send(self, method: str, url: str, payload: dict | None = None):
        """
        Send one request and return the response if its status is 2xx.

        Raises:
            TransportError: the exchange itself failed
            HttpStatusError: the status is outside 2xx
        """
        data = json.dumps(payload).encode("utf-8") if payload is not None else None

        logger.debug(f"{method} {url}")
        try:
            response = self.transport.request(
                method, url, headers=self._headers(data is not None), data=data
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error on {method} {url}: {type(e).__name__}")
            raise TransportError(method, url, e) from e

        logger.debug(f"Response status code: {response.status_code}")

        if not 200 <= response.status_code < 300:
            logger.warning(
                f"{method} {url} failed with status code {response.status_code}"
            )
            raise HttpStatusError(
                response.status_code,
                response.content.decode("utf-8", errors="replace"),
                response,
            )

        return response

    @staticmethod
    def _decode(response, adapter):
        body = _body_text(response)
        try:
            data = json.loads(body)
        except ValueError as e:
            raise DecodeError("Invalid JSON response", body) from e
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            raise DecodeError(f"Unexpected response shape ({e.error_count()} errors)", body) from e

    def verify_sign_in_token(self, token: str) -> SignInTokenVerificationResult:
        """
        Verify a token produced by the client-side sign-in flow.

        A result with `success=False` is returned, not raised: the service
        answered, it just did not accept the token.
        """
        request = _build_model(VerifySignInTokenRequest, "token", token=token)
        response = self._send(
            "POST", self.config.endpoint(SIGNIN_VERIFY_PATH), request.to_payload()
        )
        return self._decode(response, _verification_adapter)

    def create_registration_token(
        self, request: RegistrationTokenRequest | str, **fields
    ) -> str:
        """
        Issue a token that allows registering a credential for a username.

        Accepts either a RegistrationTokenRequest or a username plus optional
        overrides (display_name, att_type, auth_type, require_resident_key,
        user_verification). The response body is returned verbatim.
        """
        if not isinstance(request, RegistrationTokenRequest):
            request = _build_model(
                RegistrationTokenRequest, "username", username=request, **fields
            )
        elif fields:
            raise TypeError(
                "Pass either a RegistrationTokenRequest or keyword fields, not both"
            )

        response = self._send(
            "POST", self.config.endpoint(REGISTER_TOKEN_PATH), request.to_payload()
        )
        return _body_text(response)

    def list_credentials(self, username: str) -> List[StoredCredential]:
        """List the credentials stored for `username`, in the order the service returns them."""
        query = _build_model(CredentialListQuery, "username", username=username)
        url = f"{self.config.endpoint(CREDENTIALS_LIST_PATH)}?{query.to_query_string()}"
        response = self._send("GET", url)
        credentials = self._decode(response, _credential_list_adapter)
        logger.debug(f"Found {len(credentials)} credentials")
        return credentials

    def delete_credential(self, credential_id: str) -> None:
        request = _build_model(
            CredentialDeletionRequest, "credential_id", credential_id=credential_id
        )
        self._send(
            "POST", self.config.endpoint(CREDENTIALS_DELETE_PATH), request.to_payload()
        )
