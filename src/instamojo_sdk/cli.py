"""
Command-line interface for Instamojo SDK.

Runs one API action per invocation and prints the result. When no token is
given, a token is obtained from --user/--passwd for the duration of the run
and revoked afterwards.

Available actions:
- auth: Get a new auth token
- deauth: Delete an existing auth token
- listoffers: List all offers
- offerdetails: Show every field of one offer
- archiveoffer: Archive an offer
- uploadfile: Upload a file and print the upload response

Exit status: 0 when the action ran (even if the API reported a failure),
2 on invalid parameters, 3 when no auth token could be obtained or a deauth
response could not be decoded.
"""

import asyncio
import logging
import sys

import click

from instamojo_sdk import __version__
from instamojo_sdk import actions
from instamojo_sdk.auth import Session
from instamojo_sdk.client import InstamojoClient
from instamojo_sdk.config import InstamojoSettings
from instamojo_sdk.exceptions import AuthError
from instamojo_sdk.logging_middleware import LoggingMiddleware

logger = logging.getLogger("instamojo_sdk.cli")

UPLOAD_FILE = "uploadfile"
CLI_ACTIONS = (
    actions.AUTH,
    actions.DEAUTH,
    actions.LIST_OFFERS,
    actions.OFFER_DETAILS,
    actions.ARCHIVE_OFFER,
    UPLOAD_FILE,
)

EXIT_OK = 0
EXIT_USAGE = click.UsageError.exit_code
EXIT_API_FAILURE = 3

SEPARATOR = "----------------------------"


def validate_params(action, app_id, token, username, password, offer_slug, file_path):
    """Check parameter combinations before any network call."""
    if not app_id:
        raise click.UsageError(
            "You must specify the App-ID via the '--app' option (or INSTAMOJO_APP_ID)."
        )
    if action == actions.AUTH and not (username and password):
        raise click.UsageError(
            "Both '--user' and '--passwd' must be supplied to get an auth token."
        )
    if not token and not (username and password):
        raise click.UsageError(
            "If '--token' is not supplied, then both '--user' and '--passwd' must be supplied."
        )
    if action == actions.DEAUTH and not token:
        raise click.UsageError("You must specify the auth token to delete via '--token'.")
    if action in (actions.OFFER_DETAILS, actions.ARCHIVE_OFFER) and not offer_slug:
        raise click.UsageError(
            f"You must specify the Offer Slug via '--offerslug' for '{action}'."
        )
    if action == UPLOAD_FILE and not file_path:
        raise click.UsageError("You must specify the file to upload via '--file'.")


def echo_offer_summary(offer):
    click.echo(f"Status: {offer.status}")
    click.echo(f"Title: {offer.title}")
    click.echo(f"Slug: {offer.slug}")
    click.echo(f"ShortURL: {offer.short_url}")


async def process_action(
    client: InstamojoClient, action: str, offer_slug=None, file_path=None
) -> int:
    """Run ``action`` and print its result. Returns the exit status."""
    if action == actions.LIST_OFFERS:
        result = await client.list_offers()
        click.echo(f"List Offers API Success: {result.success}")
        click.echo(f"List Offers API Message: {result.message}")
        click.echo(f"Total {len(result.offers)} Offers")
        click.echo(SEPARATOR)
        for number, offer in enumerate(result.offers, start=1):
            click.echo(f"Offer # {number}")
            echo_offer_summary(offer)
            click.echo(SEPARATOR)

    elif action == actions.OFFER_DETAILS:
        result = await client.get_offer_details(offer_slug)
        click.echo(f"Offer Details API Success: {result.success}")
        click.echo(f"Offer Details API Message: {result.message}")
        if result.success:
            offer = result.offer
            click.echo(SEPARATOR)
            echo_offer_summary(offer)
            click.echo(f"Base Price: {offer.base_price}")
            click.echo(f"Currency: {offer.currency}")
            click.echo(f"Quantity: {offer.quantity}")
            click.echo(f"Start Date: {offer.start_date}")
            click.echo(f"End Date: {offer.end_date}")
            click.echo(f"Timezone: {offer.timezone}")
            click.echo(f"Venue: {offer.venue}")
            click.echo(f"RedirectURL: {offer.redirect_url}")
            click.echo(f"Note: {offer.note}")
            click.echo(f"Description: {offer.description}")
            click.echo(SEPARATOR)

    elif action == actions.ARCHIVE_OFFER:
        result = await client.archive_offer(offer_slug)
        click.echo(f"Archive Offer API Success: {result.success}")
        click.echo(f"Archive Offer API Message: {result.message}")

    elif action == UPLOAD_FILE:
        result = await client.upload_file(file_path)
        click.echo(f"Upload File API Success: {result.success}")
        click.echo(f"Upload File API Message: {result.message}")
        click.echo(f"Upload URL: {result.upload_url}")
        click.echo(f"Upload JSON: {result.upload_json}")

    elif action == actions.AUTH:
        result = await client.get_new_auth_token()
        click.echo(f"New Auth Token: {result.token}")
        click.echo(f"Auth API Success: {result.success}")
        click.echo(f"Auth API Message: {result.message}")

    elif action == actions.DEAUTH:
        result = await client.delete_auth_token()
        if result.invalid_json:
            click.echo(result.message, err=True)
            return EXIT_API_FAILURE
        click.echo(f"Delete-Auth API Success: {result.success}")
        click.echo(f"Delete-Auth API Message: {result.message}")

    return EXIT_OK


async def run(
    client: InstamojoClient, action: str, offer_slug=None, file_path=None
) -> int:
    """
    Run the requested action, then revoke any token minted for this run.

    The revocation also runs when the action itself raises.
    """
    exit_code = EXIT_API_FAILURE
    try:
        exit_code = await process_action(client, action, offer_slug, file_path)
    except AuthError as exc:
        click.echo(f"Failed to get an auth token. {exc}", err=True)
    finally:
        if client.session.self_issued:
            click.echo("Destructing the Auth Token generated specifically for this session.")
            exit_code = await process_action(client, actions.DEAUTH) or exit_code
    return exit_code


@click.command(
    epilog="""\b
Examples:
  instamojo-cli --action listoffers --app <App-ID> --token <auth token>
  instamojo-cli --action listoffers --app <App-ID> --user <username> --passwd <password>
  instamojo-cli --action offerdetails --offerslug <slug> --app <App-ID> --token <auth token>
"""
)
@click.option("--action", required=True, type=click.Choice(CLI_ACTIONS), help="API action")
@click.option("--app", "app_id", help="App ID (default: INSTAMOJO_APP_ID)")
@click.option("--token", help="Auth token")
@click.option("--user", "username", help="Username (for auth)")
@click.option("--passwd", "password", help="Password (for auth)")
@click.option("--offerslug", "offer_slug", help="Offer slug")
@click.option("--file", "file_path", help="File to upload (for uploadfile)")
@click.option("--api-version", help="API version (default: 1)")
@click.option(
    "--transport",
    type=click.Choice(["httpx", "aiohttp", "requests"]),
    help="HTTP transport backend",
)
@click.option("-v", "--verbose", is_flag=True, help="Log requests and responses")
@click.version_option(__version__, prog_name="instamojo-cli")
def cli(
    action,
    app_id,
    token,
    username,
    password,
    offer_slug,
    file_path,
    api_version,
    transport,
    verbose,
):
    """Command-line tool for the Instamojo API."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    settings = InstamojoSettings()
    app_id = app_id or settings.app_id

    validate_params(action, app_id, token, username, password, offer_slug, file_path)

    session = Session(
        app_id,
        token=token,
        username=username,
        password=password,
        api_version=api_version or settings.api_version,
    )
    logger.debug(f"Running '{action}' with {session!r}")

    async def _run():
        middlewares = [LoggingMiddleware(level=logging.DEBUG)]
        client = InstamojoClient(
            settings, session, transport_name=transport, middlewares=middlewares
        )
        try:
            return await run(client, action, offer_slug, file_path)
        finally:
            await client.aclose()

    exit_code = asyncio.run(_run())
    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    cli()
