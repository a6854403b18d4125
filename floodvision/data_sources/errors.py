"""Data source errors."""


class DataSourceError(Exception):
    """An external data source could not deliver usable data."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")
