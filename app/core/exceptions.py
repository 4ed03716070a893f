class CatalogUnavailableError(RuntimeError):
    """The track catalog could not be loaded or failed validation."""
