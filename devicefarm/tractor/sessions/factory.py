"""Create Device Farm sessions from credential material."""

import asyncio
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from devicefarm.tractor.errors import SETUP_FAILED_MESSAGE, SetupError
from devicefarm.tractor.models.credentials import Credentials
from devicefarm.tractor.result import Err, Ok, Result
from devicefarm.tractor.sessions.base import TestSession
from devicefarm.tractor.sessions.device_farm import DeviceFarmSession

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-west-2"


def build_boto_session(credentials: Credentials) -> boto3.Session:
    """Build a boto3 session honoring credential precedence.

    Explicit keys win over a named profile, which wins over the default chain.

    Raises:
        ValueError: If only one half of the access key pair is set

    """
    region = credentials.region or DEFAULT_REGION

    if credentials.has_partial_keys:
        raise ValueError(
            "Both the AWS access key id and the secret access key must be provided"
        )

    if credentials.has_static_keys:
        logger.info("Using explicit AWS access keys")
        return boto3.Session(
            aws_access_key_id=credentials.access_key_id,
            aws_secret_access_key=credentials.secret_access_key,
            aws_session_token=credentials.session_token or None,
            region_name=region,
        )

    if credentials.profile_name:
        logger.info(f"Using AWS profile {credentials.profile_name}")
        return boto3.Session(profile_name=credentials.profile_name, region_name=region)

    logger.info("Using the default AWS credential chain")
    return boto3.Session(region_name=region)


async def create_session(
    credentials: Credentials, poll_interval: float = 30
) -> Result[TestSession, SetupError]:
    """Create a Device Farm session and verify it is authorized.

    Args:
        credentials: Credential material
        poll_interval: Seconds between run status polls

    Returns:
        Ok with the session, or Err with a SetupError on any
        authentication, configuration or connectivity failure

    """
    try:
        boto_session = build_boto_session(credentials)
        client = boto_session.client("devicefarm")
        await asyncio.to_thread(client.list_projects)
    except (BotoCoreError, ClientError, ValueError) as e:
        return Err(SetupError(SETUP_FAILED_MESSAGE, e))

    return Ok(DeviceFarmSession(client, poll_interval=poll_interval))
