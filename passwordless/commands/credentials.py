import json

import click

from passwordless.api.exceptions import PasswordlessError
from passwordless.commands.common import fail, get_client


def list_credentials_command(username: str):
    client = get_client()
    try:
        credentials = client.list_credentials(username)
    except PasswordlessError as e:
        fail(e)

    payload = [
        credential.model_dump(by_alias=True, mode="json") for credential in credentials
    ]
    click.echo(json.dumps(payload, indent=2))


def delete_credential_command(credential_id: str):
    client = get_client()
    try:
        client.delete_credential(credential_id)
    except PasswordlessError as e:
        fail(e)

    click.echo(f"Deleted credential {credential_id}")
