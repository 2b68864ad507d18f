from passwordless.commands.tokens import register_token_command, verify_token_command
from passwordless.commands.credentials import (
    delete_credential_command,
    list_credentials_command,
)

__all__ = [
    "delete_credential_command",
    "list_credentials_command",
    "register_token_command",
    "verify_token_command",
]
