"""Fake browser for testing."""

from ghi.core.browser.abc import Browser


class FakeBrowser(Browser):
    """Records opened URLs instead of launching anything."""

    def __init__(self) -> None:
        self._opened_urls: list[str] = []

    @property
    def opened_urls(self) -> list[str]:
        """Read-only access to opened URLs for test assertions."""
        return self._opened_urls

    def open(self, url: str) -> None:
        self._opened_urls.append(url)
