from passwordless.api.client import PasswordlessClient
from passwordless.api.exceptions import (
    DecodeError,
    HttpStatusError,
    PasswordlessError,
    PasswordlessValidationError,
    TransportError,
)
from passwordless.api.models import (
    RegistrationTokenRequest,
    SignInTokenVerificationResult,
    StoredCredential,
)
from passwordless.config.config import (
    DEFAULT_API_URL,
    ClientConfig,
    Settings,
    get_settings,
    init_settings,
)
from passwordless.version import __version__

__all__ = [
    "DEFAULT_API_URL",
    "ClientConfig",
    "DecodeError",
    "HttpStatusError",
    "PasswordlessClient",
    "PasswordlessError",
    "PasswordlessValidationError",
    "RegistrationTokenRequest",
    "Settings",
    "SignInTokenVerificationResult",
    "StoredCredential",
    "TransportError",
    "__version__",
    "get_settings",
    "init_settings",
]
