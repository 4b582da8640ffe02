"""
Project directory — the candidate projects for a server.

Fetched fresh on every call; nothing is cached. Only projects whose
description starts with the configured marker are listed (an empty
marker lists everything).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from rancherctx.adapters.base import ProjectSource
from rancherctx.core.config.settings import DEFAULT_PROJECT_PREFIX
from rancherctx.core.models.server import ServerContext

logger = logging.getLogger(__name__)


class ProjectDirectory:
    """Filtered view over a ProjectSource."""

    def __init__(self, source: ProjectSource, prefix: str = DEFAULT_PROJECT_PREFIX):
        self.source = source
        self.prefix = prefix

    def list_projects(self, server: ServerContext) -> Iterator[str]:
        """Project ids for ``server``, in API order.

        The remote query runs when this is called, so DirectoryError
        surfaces here. The returned iterator is single-pass.

        Raises:
            DirectoryError: If the source cannot produce a listing.
        """
        projects = self.source.list(server)
        logger.debug(
            "Filtering %d project(s) from %s by prefix %r",
            len(projects), self.source.name, self.prefix,
        )
        return (p.id for p in projects if p.matches_prefix(self.prefix))
