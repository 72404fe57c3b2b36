"""
Exception hierarchy for the page-state feed pipeline.

FetchFailed, PayloadNotFound and MalformedPayload abort a run — no feed is
produced. ItemSkipped is local to one entry: the pipeline catches it, logs
it and moves on. ProfileError is raised while loading source profiles.
"""


class PageFeedError(Exception):
    """Base class for every error raised by pagefeed."""


class ProfileError(PageFeedError):
    """A source profile is unknown or malformed."""


class FetchFailed(PageFeedError):
    """The page could not be retrieved (transport error or non-2xx status)."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"fetch failed for {url}: {reason}")


class PayloadNotFound(PageFeedError):
    """No script element in the page matched the profile's locator rule."""


class MalformedPayload(PageFeedError):
    """The located script text is not valid JSON."""


class ItemSkipped(PageFeedError):
    """A raw entry lacks a required field (title, link or guid)."""

    def __init__(self, field: str, detail: str = ""):
        self.field = field
        self.detail = detail
        msg = f"missing required field '{field}'"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)
