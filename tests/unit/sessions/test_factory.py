"""Tests for the session factory."""

from unittest.mock import MagicMock, patch

import pytest

from botocore.exceptions import ClientError, NoCredentialsError, ProfileNotFound

from devicefarm.tractor.errors import SETUP_FAILED_MESSAGE, SetupError
from devicefarm.tractor.models.credentials import Credentials
from devicefarm.tractor.result import Err, Ok
from devicefarm.tractor.sessions.device_farm import DeviceFarmSession
from devicefarm.tractor.sessions.factory import (
    DEFAULT_REGION,
    build_boto_session,
    create_session,
)


def test_build_boto_session_prefers_static_keys() -> None:
    """Explicit keys take precedence over a profile."""
    credentials = Credentials(
        access_key_id="AKIA",
        secret_access_key="secret",
        session_token="token",
        region="us-east-1",
        profile_name="ignored",
    )

    with patch("devicefarm.tractor.sessions.factory.boto3.Session") as mock_session:
        build_boto_session(credentials)

    mock_session.assert_called_once_with(
        aws_access_key_id="AKIA",
        aws_secret_access_key="secret",
        aws_session_token="token",
        region_name="us-east-1",
    )


def test_build_boto_session_static_keys_without_token() -> None:
    """An empty session token is not forwarded."""
    credentials = Credentials(access_key_id="AKIA", secret_access_key="secret")

    with patch("devicefarm.tractor.sessions.factory.boto3.Session") as mock_session:
        build_boto_session(credentials)

    assert mock_session.call_args.kwargs["aws_session_token"] is None
    assert mock_session.call_args.kwargs["region_name"] == DEFAULT_REGION


def test_build_boto_session_uses_profile() -> None:
    """A profile is used when no static keys are given."""
    credentials = Credentials(profile_name="device-farm")

    with patch("devicefarm.tractor.sessions.factory.boto3.Session") as mock_session:
        build_boto_session(credentials)

    mock_session.assert_called_once_with(
        profile_name="device-farm", region_name=DEFAULT_REGION
    )


def test_build_boto_session_default_chain() -> None:
    """Empty credentials fall back to the default chain."""
    with patch("devicefarm.tractor.sessions.factory.boto3.Session") as mock_session:
        build_boto_session(Credentials(region="us-west-2"))

    mock_session.assert_called_once_with(region_name="us-west-2")


async def test_create_session_success() -> None:
    """create_session returns a Device Farm session once projects are listed."""
    client = MagicMock()
    client.list_projects.return_value = {"projects": []}

    with patch("devicefarm.tractor.sessions.factory.boto3.Session") as mock_session:
        mock_session.return_value.client.return_value = client

        result = await create_session(Credentials(), poll_interval=5)

    assert isinstance(result, Ok)
    assert isinstance(result.value, DeviceFarmSession)
    assert result.value.client is client
    assert result.value.poll_interval == 5
    mock_session.return_value.client.assert_called_once_with("devicefarm")
    client.list_projects.assert_called_once_with()


async def test_create_session_authorization_failure() -> None:
    """create_session returns a SetupError when AWS rejects the credentials."""
    cause = ClientError(
        {"Error": {"Code": "AccessDeniedException", "Message": "denied"}},
        "ListProjects",
    )
    client = MagicMock()
    client.list_projects.side_effect = cause

    with patch("devicefarm.tractor.sessions.factory.boto3.Session") as mock_session:
        mock_session.return_value.client.return_value = client

        result = await create_session(Credentials())

    assert isinstance(result, Err)
    assert isinstance(result.error, SetupError)
    assert result.error.message == SETUP_FAILED_MESSAGE
    assert result.error.cause is cause


async def test_create_session_missing_credentials() -> None:
    """create_session returns a SetupError when no credentials are found."""
    client = MagicMock()
    client.list_projects.side_effect = NoCredentialsError()

    with patch("devicefarm.tractor.sessions.factory.boto3.Session") as mock_session:
        mock_session.return_value.client.return_value = client

        result = await create_session(Credentials())

    assert isinstance(result, Err)
    assert isinstance(result.error.cause, NoCredentialsError)


async def test_create_session_unknown_profile() -> None:
    """create_session returns a SetupError for an unknown profile."""
    with patch(
        "devicefarm.tractor.sessions.factory.boto3.Session",
        side_effect=ProfileNotFound(profile="missing"),
    ):
        result = await create_session(Credentials(profile_name="missing"))

    assert isinstance(result, Err)
    assert isinstance(result.error.cause, ProfileNotFound)


@pytest.mark.parametrize(
    "credentials",
    [
        Credentials(access_key_id="AKIA"),
        Credentials(secret_access_key="secret", profile_name="device-farm"),
    ],
)
async def test_create_session_partial_key_pair(credentials: Credentials) -> None:
    """create_session rejects half of an access key pair."""
    with patch("devicefarm.tractor.sessions.factory.boto3.Session") as mock_session:
        result = await create_session(credentials)

    assert isinstance(result, Err)
    assert result.error.message == SETUP_FAILED_MESSAGE
    assert isinstance(result.error.cause, ValueError)
    mock_session.assert_not_called()
