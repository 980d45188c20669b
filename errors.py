# Base class for everything this app raises on purpose.
class WeatherError(RuntimeError):
    pass


# Anything that stops a fetch from producing a full record.
class FetchError(WeatherError):
    pass


class NetworkError(FetchError):
    pass


# The provider answered, but with a failure status ("cod" != 200).
class ApiError(FetchError):
    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


class ParseError(FetchError):
    pass


# History file could not be read or written.
class HistoryError(WeatherError):
    pass
