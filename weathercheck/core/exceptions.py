"""Error taxonomy shared by the clients and the view state controller."""


class WeatherCheckError(Exception):
    """Base exception. `message` is safe to show to the user."""

    default_message = "Something went wrong"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class LocationError(WeatherCheckError):
    """The geolocation capability could not produce a position."""


class LocationDenied(LocationError):
    default_message = "Unable to retrieve your location. Please allow access."


class LocationUnsupported(LocationError):
    default_message = "Geolocation not supported by your browser"


class UpstreamError(WeatherCheckError):
    """An upstream HTTP API failed or returned something unusable."""


class WeatherFetchFailed(UpstreamError):
    default_message = "Failed to fetch weather data"


class PlaceFetchFailed(UpstreamError):
    default_message = "Failed to fetch location name"
