import sys
import time
from datetime import datetime

from models import TIMESTAMP_FORMAT, WeatherRecord

TYPE_DELAY = 0.03
SPINNER_FRAMES = "|/-\\"

class ConsoleDisplay:
    """
    Console presentation: typewriter-style lines, the weather record block,
    history listing and a loading spinner. The delays are cosmetic only;
    pass delay=0 (and skip the spinner) for instant output.
    """

    def __init__(self, delay: float = TYPE_DELAY, stream=None, sleep=time.sleep):
        self.delay = delay
        self.stream = stream if stream is not None else sys.stdout
        self.sleep = sleep

    def typewriter(self, text: str, delay: float | None = None):
        delay = self.delay if delay is None else delay
        if delay <= 0:
            self.stream.write(text + "\n")
            self.stream.flush()
            return
        for char in text:
            self.stream.write(char)
            self.stream.flush()
            self.sleep(delay)
        self.stream.write("\n")
        self.stream.flush()

    # Renders the record in a fixed field order.
    def show(self, record: WeatherRecord):
        for line in format_record(record):
            self.typewriter(line)

    def show_history(self, lines: list[str] | None):
        self.stream.write("\n--- Search History ---\n")
        if lines is None:
            self.stream.write("No history found.\n")
        for line in lines or []:
            self.stream.write(line + "\n")
        self.stream.flush()

    def show_local_time(self, now: datetime | None = None):
        now = now or datetime.now()
        self.typewriter(f"Local Time: {now.strftime(TIMESTAMP_FORMAT)}")

    # Spins "| / - \" after the message for `duration` seconds, then erases it.
    def spinner(self, message: str = "Fetching weather data...", duration: float = 3.0):
        self.stream.write(message + " ")
        for i in range(int(duration * 10)):
            self.stream.write("\b" + SPINNER_FRAMES[i % len(SPINNER_FRAMES)])
            self.stream.flush()
            self.sleep(0.1)
        self.stream.write("\b \n")
        self.stream.flush()


def format_record(record: WeatherRecord) -> list[str]:
    return [
        f"City: {record.city}, {record.country}",
        f"Temperature: {record.temperature:.2f} °C",
        f"Feels Like: {record.feels_like:.2f} °C",
        f"Condition: {record.condition}",
        f"Humidity: {record.humidity}%",
        f"Wind Speed: {record.wind_speed:.2f} m/s",
        f"Cloudiness: {record.cloudiness}%",
        f"Visibility: {record.visibility_km:.2f} km",
        f"Pressure: {record.pressure} hPa",
        f"Sunrise: {record.sunrise}",
        f"Sunset: {record.sunset}",
    ]
