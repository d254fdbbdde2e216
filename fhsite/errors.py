from __future__ import annotations


class BuildError(Exception):
    """Base class for failures that stop a site build."""


class ConfigError(BuildError):
    pass


class MalformedDocument(BuildError):
    """Raised when a source page has no content container."""


class TitleNotFound(BuildError):
    """Raised when no title source is present in a page."""


class StatsUnavailable(BuildError):
    """Raised when the statistics page cannot supply all three figures."""


class AdCatalogCorrupt(BuildError):
    pass


class NoAdsAvailable(BuildError):
    pass


class TemplateInvalid(BuildError):
    """Raised when the template keeps tokens no build step will fill."""
