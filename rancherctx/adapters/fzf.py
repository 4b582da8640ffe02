"""
fzf selector — interactive choice through the external fuzzy finder.

Candidates are fed on stdin; fzf draws its UI on the terminal and
prints the chosen line on stdout.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence

from rancherctx.adapters.base import InteractiveSelector
from rancherctx.core.errors import SelectionError

logger = logging.getLogger(__name__)


class FzfSelector(InteractiveSelector):
    """InteractiveSelector that shells out to ``fzf``."""

    def __init__(self, binary: str = "fzf", extra_args: Sequence[str] = ("--ansi", "--no-preview")):
        self._binary = binary
        self._extra_args = list(extra_args)

    @property
    def name(self) -> str:
        return "fzf"

    def is_available(self) -> bool:
        return shutil.which(self._binary) is not None

    def select(self, candidates: Sequence[str]) -> str:
        if not candidates:
            raise SelectionError("No projects to choose from")

        cmd = [self._binary, *self._extra_args]
        logger.debug("Running %s with %d candidate(s)", cmd, len(candidates))

        try:
            result = subprocess.run(
                cmd,
                input="\n".join(candidates) + "\n",
                stdout=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise SelectionError(f"Cannot run {self._binary}: {e}") from e

        choice = result.stdout.strip()
        if result.returncode != 0 or not choice:
            raise SelectionError("You did not choose any of the options")
        return choice
