"""
Server models — one entry of the rancher CLI config, and the explicit
context value passed to every component call.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ServerConfig(BaseModel):
    """A server entry as stored under ``Servers`` in cli2.json.

    Field names follow the file (camelCase aliases). Unknown keys are
    kept so a model round-trip never drops data the rancher CLI owns.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    access_key: str = Field(default="", alias="accessKey")
    secret_key: str = Field(default="", alias="secretKey")
    token_key: str = Field(default="", alias="tokenKey")
    url: str = ""
    project: str = ""
    cacert: str = ""

    def credentials(self) -> tuple[str, str]:
        """Basic-auth (user, password) pair for the management API.

        ``tokenKey`` is ``"<access>:<secret>"``; fall back to the
        separate keys when it is absent.
        """
        if self.token_key and ":" in self.token_key:
            user, _, password = self.token_key.partition(":")
            return user, password
        return self.access_key, self.secret_key


class ServerContext(BaseModel):
    """The current server, resolved once and threaded through every call."""

    model_config = ConfigDict(frozen=True)

    server_id: str
    base_url: str = ""
    username: str = ""
    password: str = ""
    cacert: str = ""

    @classmethod
    def from_config(cls, server_id: str, server: ServerConfig) -> ServerContext:
        user, password = server.credentials()
        return cls(
            server_id=server_id,
            base_url=server.url,
            username=user,
            password=password,
            cacert=server.cacert,
        )

    def __repr__(self) -> str:
        # Never leak the secret into logs or tracebacks
        return f"ServerContext(server_id={self.server_id!r}, base_url={self.base_url!r})"

    __str__ = __repr__
