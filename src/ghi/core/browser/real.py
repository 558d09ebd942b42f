"""Production browser launcher."""

import logging
import shlex
import subprocess

import click

from ghi.core.browser.abc import Browser

logger = logging.getLogger(__name__)


class RealBrowser(Browser):
    """Launch a configured browser command, or the platform default via click."""

    def __init__(self, command: str | None) -> None:
        self._command = command

    def open(self, url: str) -> None:
        if self._command:
            args = [*shlex.split(self._command), url]
            logger.debug("Launching browser: %s", args)
            try:
                subprocess.run(args, check=True)
            except FileNotFoundError as e:
                msg = f"Browser command not found: {args[0]}"
                raise RuntimeError(msg) from e
            except subprocess.CalledProcessError as e:
                msg = f"Browser command failed with exit code {e.returncode}: {self._command}"
                raise RuntimeError(msg) from e
            return

        logger.debug("Launching default browser for %s", url)
        if click.launch(url) != 0:
            msg = f"Could not open a browser for {url}"
            raise RuntimeError(msg)
