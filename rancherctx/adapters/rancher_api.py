"""
Rancher API adapter — lists projects over the management API.

    GET {url}/v3/projects
    Authorization: Basic base64(<access>:<secret>)

The response is a collection document whose ``data`` array holds one
object per project with at least ``id`` (and usually ``name`` and
``description``).
"""

from __future__ import annotations

import base64
import json
import logging
import ssl
import urllib.error
import urllib.request

from pydantic import ValidationError

from rancherctx import __version__
from rancherctx.adapters.base import ProjectSource
from rancherctx.core.errors import DirectoryError
from rancherctx.core.models.project import Project
from rancherctx.core.models.server import ServerContext

logger = logging.getLogger(__name__)

PROJECTS_PATH = "/v3/projects"


def projects_url(base_url: str) -> str:
    """Build the listing URL, tolerating a base URL that already ends in /v3."""
    base = base_url.rstrip("/")
    if base.endswith("/v3"):
        base = base[: -len("/v3")]
    return base + PROJECTS_PATH


class RancherApiSource(ProjectSource):
    """ProjectSource backed by the Rancher v3 management API."""

    @property
    def name(self) -> str:
        return "rancher-api"

    def list(self, server: ServerContext) -> list[Project]:
        if not server.base_url:
            raise DirectoryError(f"Server '{server.server_id}' has no URL configured")

        url = projects_url(server.base_url)
        req = urllib.request.Request(url, headers=self._headers(server))
        context = self._ssl_context(server)
        logger.debug("GET %s", url)

        try:
            with urllib.request.urlopen(req, context=context) as resp:
                body = resp.read()
        except urllib.error.HTTPError as e:
            raise DirectoryError(f"{url} returned HTTP {e.code} {e.reason}") from e
        except urllib.error.URLError as e:
            raise DirectoryError(f"Cannot reach {url}: {e.reason}") from e
        except OSError as e:
            raise DirectoryError(f"Request to {url} failed: {e}") from e

        projects = parse_projects(body)
        logger.debug("%s listed %d project(s)", server.server_id, len(projects))
        return projects

    def _headers(self, server: ServerContext) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": f"rancherctx/{__version__}",
        }
        if server.username or server.password:
            token = f"{server.username}:{server.password}".encode()
            headers["Authorization"] = "Basic " + base64.b64encode(token).decode("ascii")
        return headers

    def _ssl_context(self, server: ServerContext) -> ssl.SSLContext | None:
        if not server.cacert:
            return None
        try:
            return ssl.create_default_context(cadata=server.cacert)
        except (ssl.SSLError, ValueError) as e:
            raise DirectoryError(
                f"Invalid CA certificate for server '{server.server_id}': {e}"
            ) from e


def parse_projects(body: bytes | str) -> list[Project]:
    """Parse a ``/v3/projects`` response body.

    Raises:
        DirectoryError: If the body is not the expected collection shape.
    """
    try:
        doc = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DirectoryError(f"Malformed project listing: {e}") from e

    if not isinstance(doc, dict) or not isinstance(doc.get("data"), list):
        raise DirectoryError("Malformed project listing: missing 'data' array")

    try:
        return [Project.model_validate(item) for item in doc["data"]]
    except ValidationError as e:
        raise DirectoryError(f"Malformed project entry: {e}") from e
