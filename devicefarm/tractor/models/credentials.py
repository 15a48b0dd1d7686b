"""Credential material used to open a Device Farm session."""

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """AWS credential material for a single invocation.

    Empty values mean "defer to the default resolution chain".
    """

    model_config = ConfigDict(frozen=True)

    access_key_id: str = Field(default="", description="AWS access key id")
    secret_access_key: str = Field(
        default="", description="AWS secret access key", repr=False
    )
    session_token: str = Field(default="", description="AWS session token", repr=False)
    region: str = Field(default="", description="AWS region name")
    profile_name: str = Field(
        default="", description="Profile name used to load AWS credentials"
    )

    @property
    def has_static_keys(self) -> bool:
        """Whether an explicit access key pair was provided."""
        return bool(self.access_key_id and self.secret_access_key)

    @property
    def has_partial_keys(self) -> bool:
        """Whether only one half of the access key pair was provided."""
        return bool(self.access_key_id) != bool(self.secret_access_key)
