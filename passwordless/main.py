import click

from passwordless.commands import (
    delete_credential_command,
    list_credentials_command,
    register_token_command,
    verify_token_command,
)
from passwordless.config.config import init_settings
from passwordless.logger import get_logger
from passwordless.version import __version__

logger = get_logger()


@click.group()
@click.version_option(__version__, prog_name="passwordless")
@click.option(
    "--api-url",
    envvar="PASSWORDLESS_API_URL",
    default=None,
    help="Base URL of the passwordless API (default: https://api.passwordless.dev/)",
)
@click.option(
    "--api-secret",
    envvar="PASSWORDLESS_API_SECRET",
    default=None,
    help="API secret sent in the ApiSecret header.",
)
def cli(api_url: str | None, api_secret: str | None):
    """
    Command line client for the passwordless.dev API.
    """
    try:
        init_settings(api_url=api_url, api_secret=api_secret)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--api-url")


@cli.command("verify-token")
@click.argument("token")
def verify_token(token: str):
    """
    Verify a sign-in token and print the result as JSON.
    """
    verify_token_command(token)


@cli.command("register-token")
@click.argument("username")
@click.option("--display-name", default=None, help="Display name (default: Test)")
@click.option("--att-type", default=None, help="Attestation type (default: None)")
@click.option("--auth-type", default=None, help="Authenticator attachment type")
@click.option(
    "--require-resident-key/--no-require-resident-key",
    default=None,
    help="Require a discoverable credential (default: no)",
)
@click.option(
    "--user-verification",
    default=None,
    help="User verification policy (default: Preferred)",
)
def register_token(username: str, **fields):
    """
    Create a registration token for USERNAME.
    """
    register_token_command(username, **fields)


@cli.command("list-credentials")
@click.argument("username")
def list_credentials(username: str):
    """
    List the credentials stored for USERNAME.
    """
    list_credentials_command(username)


@cli.command("delete-credential")
@click.argument("credential_id")
def delete_credential(credential_id: str):
    """
    Delete the credential with CREDENTIAL_ID.
    """
    logger.info(f"Deleting credential {credential_id}...")
    delete_credential_command(credential_id)


def main():
    """
    Main entry point for the passwordless CLI.
    """
    cli()


if __name__ == "__main__":
    main()
