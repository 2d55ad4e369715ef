class SalesDataError(Exception): ...


class GridError(SalesDataError): ...


class IngestError(SalesDataError): ...


class StoreError(SalesDataError): ...


class ComparisonError(SalesDataError): ...


def require(condition: bool, message: str, exc: type[SalesDataError] = SalesDataError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
