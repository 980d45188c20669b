from dataclasses import dataclass
from datetime import datetime

from errors import FetchError

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

@dataclass(frozen=True)
class WeatherRecord:
    city: str
    country: str
    temperature: float
    feels_like: float
    humidity: int
    pressure: int
    condition: str
    wind_speed: float
    cloudiness: int
    visibility_km: float
    sunrise: str
    sunset: str

    def __repr__(self):
        return f"<WeatherRecord {self.city}, {self.country} {self.temperature:.2f}C>"


@dataclass(frozen=True)
class HistoryEntry:
    city: str
    timestamp: datetime

    # One line of the history file, without the trailing newline.
    def to_line(self) -> str:
        return f"{self.city} at {self.timestamp.strftime(TIMESTAMP_FORMAT)}"


# Outcome of a single fetch: a full record or the error that prevented one.
@dataclass(frozen=True)
class FetchResult:
    record: WeatherRecord | None = None
    error: FetchError | None = None

    def __post_init__(self):
        if (self.record is None) == (self.error is None):
            raise ValueError("FetchResult needs exactly one of record or error")

    @property
    def ok(self) -> bool:
        return self.record is not None
