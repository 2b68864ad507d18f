import click

from passwordless.api.client import PasswordlessClient
from passwordless.api.exceptions import HttpStatusError, PasswordlessError
from passwordless.config.config import get_settings
from passwordless.logger import get_logger

logger = get_logger()


def get_client() -> PasswordlessClient:
    """Client built from the settings installed by the CLI group."""
    try:
        return PasswordlessClient.from_settings(get_settings())
    except PasswordlessError as e:
        raise click.ClickException(str(e))


def fail(error: PasswordlessError):
    """Report an API error and exit non-zero."""
    if isinstance(error, HttpStatusError):
        logger.debug(f"Response body: {error.body}")
        raise click.ClickException(
            f"Passwordless API returned status {error.status_code}: {error.body}"
        )
    raise click.ClickException(str(error))
