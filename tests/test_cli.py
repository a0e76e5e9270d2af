"""
Tests for the instamojo-cli command.

The CLI builds its own client, so these tests swap the transport factory in
instamojo_sdk.client for one returning a MockTransport.
"""

import pytest
from click.testing import CliRunner

from instamojo_sdk import cli as cli_module
from instamojo_sdk.cli import cli
from tests.fakes import MockTransport
from tests.fakes import RoutedHandler
from tests.fakes import connection_refused

LIST_OFFERS_BODY = {
    "success": True,
    "offers": [
        {"shorturl": "http://imjo.in/a", "title": "Ticket", "slug": "ticket", "status": "Live"},
        {"shorturl": "http://imjo.in/b", "title": "Ebook", "slug": "ebook", "status": "Live"},
    ],
}


@pytest.fixture(autouse=True)
def environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("INSTAMOJO_BASE_URL", "https://api.test/api/")
    monkeypatch.delenv("INSTAMOJO_APP_ID", raising=False)


@pytest.fixture
def install_transport(monkeypatch):
    def install(handler=None) -> MockTransport:
        transport = MockTransport(handler)
        monkeypatch.setattr(
            "instamojo_sdk.client.get_transport", lambda name, timeout=30.0: transport
        )
        return transport

    return install


@pytest.fixture
def runner():
    return CliRunner()


def test_list_offers_with_token(runner, install_transport):
    transport = install_transport(RoutedHandler({("GET", "/offer/"): LIST_OFFERS_BODY}))

    result = runner.invoke(cli, ["--action", "listoffers", "--app", "app", "--token", "tok"])

    assert result.exit_code == 0, result.output
    assert "List Offers API Success: True" in result.stdout
    assert "Total 2 Offers" in result.stdout
    assert "Slug: ebook" in result.stdout
    assert "ShortURL: http://imjo.in/a" in result.stdout
    assert transport.request_count == 1
    assert transport.closed is True


def test_implicit_auth_runs_auth_main_deauth(runner, install_transport):
    """
    GIVEN: username/password instead of a token
    WHEN: listing offers
    THEN: exactly auth, listoffers and deauth run, in that order, and the
          same self-issued token is revoked
    """
    transport = install_transport(
        RoutedHandler(
            {
                ("POST", "/auth/"): {"success": True, "token": "minted"},
                ("GET", "/offer/"): LIST_OFFERS_BODY,
                ("DELETE", "/auth/minted/"): {"success": True, "message": "Deleted."},
            }
        )
    )

    result = runner.invoke(
        cli, ["--action", "listoffers", "--app", "app", "--user", "bob", "--passwd", "pw"]
    )

    assert result.exit_code == 0, result.output
    assert transport.calls == [
        ("POST", "https://api.test/api/1/auth/"),
        ("GET", "https://api.test/api/1/offer/"),
        ("DELETE", "https://api.test/api/1/auth/minted/"),
    ]
    assert "Destructing the Auth Token generated specifically for this session." in result.stdout
    assert "Delete-Auth API Success: True" in result.stdout


def test_auth_failure_exits_without_main_call(runner, install_transport):
    transport = install_transport(
        RoutedHandler({("POST", "/auth/"): {"success": False, "message": "Invalid credentials."}})
    )

    result = runner.invoke(
        cli, ["--action", "listoffers", "--app", "app", "--user", "bob", "--passwd", "bad"]
    )

    assert result.exit_code == cli_module.EXIT_API_FAILURE
    assert "Failed to get an auth token" in result.stderr
    assert "Invalid credentials." in result.stderr
    assert transport.calls == [("POST", "https://api.test/api/1/auth/")]


def test_deauth_with_invalid_json_exits_with_error(runner, install_transport):
    install_transport(RoutedHandler({("DELETE", "/auth/tok/"): "<html>oops</html>"}))

    result = runner.invoke(cli, ["--action", "deauth", "--app", "app", "--token", "tok"])

    assert result.exit_code == cli_module.EXIT_API_FAILURE
    assert "Invalid JSON:" in result.stderr
    assert "Delete-Auth API Success" not in result.stdout


def test_invalid_json_elsewhere_is_reported_not_fatal(runner, install_transport):
    install_transport(RoutedHandler({("GET", "/offer/"): "not json"}))

    result = runner.invoke(cli, ["--action", "listoffers", "--app", "app", "--token", "tok"])

    assert result.exit_code == 0
    assert "List Offers API Success: False" in result.stdout
    assert "List Offers API Message: Invalid JSON:" in result.stdout


def test_connection_failure_is_reported(runner, install_transport):
    install_transport(connection_refused)

    result = runner.invoke(
        cli, ["--action", "offerdetails", "--offerslug", "x", "--app", "app", "--token", "tok"]
    )

    assert result.exit_code == 0
    assert "Offer Details API Success: False" in result.stdout
    assert "https://api.test/api/1/offer/x/" in result.stdout


def test_offer_details_rendering(runner, install_transport):
    install_transport(
        RoutedHandler(
            {
                ("GET", "/offer/ticket/"): {
                    "success": True,
                    "offer": {"slug": "ticket", "base_price": "499.00", "currency": "INR", "venue": "Goa"},
                }
            }
        )
    )

    result = runner.invoke(
        cli, ["--action", "offerdetails", "--offerslug", "ticket", "--app", "app", "--token", "tok"]
    )

    assert result.exit_code == 0, result.output
    assert "Base Price: 499.00" in result.stdout
    assert "Currency: INR" in result.stdout
    assert "Venue: Goa" in result.stdout


def test_auth_action_prints_token_and_keeps_it(runner, install_transport):
    transport = install_transport(RoutedHandler({("POST", "/auth/"): {"success": True, "token": "t-9"}}))

    result = runner.invoke(cli, ["--action", "auth", "--app", "app", "--user", "bob", "--passwd", "pw"])

    assert result.exit_code == 0, result.output
    assert "New Auth Token: t-9" in result.stdout
    assert "Destructing" not in result.stdout
    assert transport.request_count == 1


def test_upload_file(runner, install_transport, tmp_path):
    upload_url = "https://upload.test/abc"
    install_transport(
        RoutedHandler(
            {
                ("GET", "/offer/get_file_upload_url/"): {"success": True, "upload_url": upload_url},
                ("POST", upload_url): '{"name": "book.pdf"}',
            }
        )
    )
    (tmp_path / "book.pdf").write_bytes(b"data")

    result = runner.invoke(
        cli, ["--action", "uploadfile", "--file", "book.pdf", "--app", "app", "--token", "tok"]
    )

    assert result.exit_code == 0, result.output
    assert "Upload File API Success: True" in result.stdout
    assert 'Upload JSON: {"name": "book.pdf"}' in result.stdout


def test_app_id_from_environment(runner, install_transport, monkeypatch):
    monkeypatch.setenv("INSTAMOJO_APP_ID", "env-app")
    transport = install_transport(RoutedHandler({("GET", "/offer/"): LIST_OFFERS_BODY}))

    result = runner.invoke(cli, ["--action", "listoffers", "--token", "tok"])

    assert result.exit_code == 0, result.output
    assert transport.request_calls[0]["headers"]["X-App-Id"] == "env-app"


@pytest.mark.parametrize(
    "args,expected",
    [
        (["--action", "refund", "--app", "a", "--token", "t"], "Invalid value for '--action'"),
        (["--app", "a", "--token", "t"], "Missing option '--action'"),
        (["--action", "listoffers", "--token", "t"], "App-ID"),
        (["--action", "listoffers", "--app", "a", "--user", "bob"], "'--passwd'"),
        (["--action", "offerdetails", "--app", "a", "--token", "t"], "--offerslug"),
        (["--action", "archiveoffer", "--app", "a", "--token", "t"], "--offerslug"),
        (["--action", "uploadfile", "--app", "a", "--token", "t"], "--file"),
        (["--action", "deauth", "--app", "a", "--user", "u", "--passwd", "p"], "--token"),
        (["--action", "auth", "--app", "a", "--token", "t"], "'--user'"),
    ],
)
def test_parameter_validation(runner, install_transport, args, expected):
    transport = install_transport()

    result = runner.invoke(cli, args)

    assert result.exit_code == cli_module.EXIT_USAGE
    assert result.exit_code != cli_module.EXIT_API_FAILURE
    assert "Usage:" in result.stderr
    assert expected in result.stderr
    assert transport.request_count == 0


def test_self_issued_token_is_revoked_when_action_crashes(runner, install_transport):
    """
    GIVEN: a self-issued token and a main call that fails unexpectedly
    WHEN: the CLI runs
    THEN: the error still surfaces, but the token is revoked first
    """

    def explode(call):
        raise RuntimeError("decoder blew up")

    transport = install_transport(
        RoutedHandler(
            {
                ("POST", "/auth/"): {"success": True, "token": "minted"},
                ("GET", "/offer/"): explode,
                ("DELETE", "/auth/minted/"): {"success": True, "message": "Deleted."},
            }
        )
    )

    result = runner.invoke(
        cli, ["--action", "listoffers", "--app", "app", "--user", "bob", "--passwd", "pw"]
    )

    assert isinstance(result.exception, RuntimeError)
    assert transport.calls[-1] == ("DELETE", "https://api.test/api/1/auth/minted/")
    assert "Delete-Auth API Success: True" in result.stdout
    assert transport.closed is True
