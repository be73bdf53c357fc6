"""Failures raised while serving stories from the Hacker News API."""


class HackerNewsError(Exception):
    pass


class InvalidCountError(HackerNewsError, ValueError):
    """Requested story count is outside the accepted range."""


class UpstreamUnavailableError(HackerNewsError):
    """The best-story id list came back empty or missing."""


class UpstreamNetworkError(HackerNewsError):
    """Transport failure or non-success status from the upstream API."""


class UpstreamParseError(HackerNewsError):
    """Upstream body is not valid JSON or has the wrong shape."""
