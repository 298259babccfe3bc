class CalendarUpstreamError(RuntimeError):
    """Raised when the calendar provider fails (auth, network, API errors)."""
    pass


class TextGenerationUpstreamError(RuntimeError):
    """Raised when the text-generation provider fails or returns nothing usable."""
    pass
