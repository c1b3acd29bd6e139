class InvalidArgumentError(ValueError):
    """
    Raised when a station search receives a missing or out-of-range argument
    (coordinate, instant).

    Routers do not catch it; the application maps it to HTTP 400.
    """
