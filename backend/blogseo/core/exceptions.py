class SEOToolkitError(Exception):
    """Base class for errors raised by the SEO toolkit."""


class InvalidContentError(SEOToolkitError, ValueError):
    """Raised when analysis input violates the documented input contract."""


class FetchError(SEOToolkitError):
    """Raised when a page cannot be fetched for auditing."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")
