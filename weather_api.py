import logging
from datetime import datetime

import requests

from errors import ApiError, FetchError, NetworkError, ParseError
from models import FetchResult, WeatherRecord

logger = logging.getLogger(__name__)

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_TIMEOUT = 10.0

# Converts epoch seconds to local wall-clock time.
def format_time(timestamp) -> str:
    return datetime.fromtimestamp(int(timestamp)).strftime("%H:%M:%S")

# Turns a current-conditions payload into a record, or raises ApiError / ParseError.
def parse_weather(data) -> WeatherRecord:
    """
    The provider reports failures in-band: {"cod": "404", "message": "city not found"}.
    "cod" is an int on success and often a string on failure, so compare as int.
    Every listed field is required; a missing or mistyped one is a ParseError.
    """
    if not isinstance(data, dict):
        raise ParseError(f"Unexpected payload type: {type(data).__name__}")

    if "cod" in data:
        try:
            status = int(data["cod"])
        except (TypeError, ValueError):
            raise ParseError(f"Unexpected status code: {data['cod']!r}")
        if status != 200:
            raise ApiError(str(data.get("message") or "unknown error"), status=status)

    try:
        sys_block = data["sys"]
        main = data["main"]
        return WeatherRecord(
            city=str(data["name"]),
            country=str(sys_block["country"]),
            temperature=float(main["temp"]),
            feels_like=float(main["feels_like"]),
            humidity=int(main["humidity"]),
            pressure=int(main["pressure"]),
            condition=str(data["weather"][0]["description"]),
            wind_speed=float(data["wind"]["speed"]),
            cloudiness=int(data["clouds"]["all"]),
            visibility_km=float(data["visibility"]) / 1000.0,
            sunrise=format_time(sys_block["sunrise"]),
            sunset=format_time(sys_block["sunset"]),
        )
    except (KeyError, IndexError, TypeError, ValueError, OverflowError, OSError) as e:
        raise ParseError(f"Malformed weather payload: {e!r}")


class WeatherClient:
    """
    Fetches current conditions for a city from OpenWeatherMap and records
    each successful query in the history store.

    `progress` is an optional no-argument callable run while waiting on the
    network (the console spinner); it never affects the result.
    """

    def __init__(self, api_key: str, history, timeout: float = DEFAULT_TIMEOUT,
                 progress=None, base_url: str = OPENWEATHER_URL):
        self.api_key = api_key
        self.history = history
        self.timeout = timeout
        self.progress = progress
        self.base_url = base_url

    def fetch(self, city: str) -> FetchResult:
        try:
            data = self._get(city)
            record = parse_weather(data)
        except FetchError as e:
            logger.warning(f"Weather fetch for {city!r} failed: {e}")
            return FetchResult(error=e)

        # History keeps what the user typed, not the provider's resolved name.
        self.history.append(city)
        return FetchResult(record=record)

    # Performs the GET and decodes the body whatever the HTTP status was.
    def _get(self, city: str):
        params = {"q": city, "appid": self.api_key, "units": "metric"}
        logger.debug(f"GET {self.base_url} q={city!r}")
        if self.progress is not None:
            self.progress()
        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(f"Weather request failed: {e}")
        except UnicodeError as e:
            raise ParseError(f"City name cannot be sent to the provider: {e}")

        try:
            logger.debug(f"Provider answered HTTP {response.status_code}")
            try:
                return response.json()
            except ValueError as e:
                raise ParseError(f"Response was not valid JSON: {e}")
        finally:
            response.close()
