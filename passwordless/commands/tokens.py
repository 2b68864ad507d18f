import click

from passwordless.api.exceptions import PasswordlessError
from passwordless.commands.common import fail, get_client


def verify_token_command(token: str):
    client = get_client()
    try:
        result = client.verify_sign_in_token(token)
    except PasswordlessError as e:
        fail(e)

    click.echo(result.model_dump_json(by_alias=True, indent=2))
    if not result.success:
        raise click.ClickException("Token was not verified")


def register_token_command(username: str, **fields):
    """Print the registration token exactly as the service returned it."""
    client = get_client()
    fields = {key: value for key, value in fields.items() if value is not None}
    try:
        token = client.create_registration_token(username, **fields)
    except PasswordlessError as e:
        fail(e)

    click.echo(token)
