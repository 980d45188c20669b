import logging
import os
import sys
from functools import partial

from dotenv import load_dotenv

from display import TYPE_DELAY, ConsoleDisplay
from errors import ApiError
from history import HISTORY_FILE, HistoryStore
from weather_api import DEFAULT_TIMEOUT, WeatherClient

logger = logging.getLogger(__name__)

SPINNER_SECONDS = 3.0

MENU = """
**************** Weather App Menu ****************
1. Fetch Weather
2. Show Search History
3. Show Local Time
0. Exit"""

class WeatherApp:
    """
    Interactive numeric menu wired to the client, history store and display.
    Menu and weather output go to the display stream; fetch diagnostics go
    to `error_stream` (stderr by default).
    """

    def __init__(self, client: WeatherClient, history: HistoryStore, display: ConsoleDisplay, error_stream=None):
        self.client = client
        self.history = history
        self.display = display
        self.error_stream = error_stream if error_stream is not None else sys.stderr

    # Loops until the user picks 0 (or input ends); returns the process exit status.
    def run(self, input_func=input) -> int:
        while True:
            self._print(MENU)
            try:
                raw = input_func("Enter your choice: ")
            except (EOFError, KeyboardInterrupt):
                self._print("")
                raw = "0"
            except UnicodeDecodeError:
                raw = ""

            try:
                choice = int(raw.strip())
            except ValueError:
                choice = None

            if choice == 1:
                self.fetch_weather(input_func)
            elif choice == 2:
                self.display.show_history(self.history.read_all())
            elif choice == 3:
                self.display.show_local_time()
            elif choice == 0:
                self._print("Exiting weather fetcher")
                return 0
            else:
                self._print("Invalid choice. Try again.")

    def fetch_weather(self, input_func=input):
        try:
            city = input_func("Enter city name: ")
        except (EOFError, KeyboardInterrupt):
            self._print("")
            return
        except UnicodeDecodeError:
            self._error("Error fetching weather: city name is not valid text")
            return

        result = self.client.fetch(city)
        if result.ok:
            self.display.show(result.record)
        elif isinstance(result.error, ApiError):
            self._error(f"API Error: {result.error.message}")
        else:
            self._error(f"Error fetching weather: {result.error}")

    def _print(self, text: str):
        self.display.stream.write(text + "\n")
        self.display.stream.flush()

    def _error(self, text: str):
        self.error_stream.write(text + "\n")
        self.error_stream.flush()


# Reads a numeric setting, keeping the default when the value doesn't parse.
def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring {name}={value!r}: not a number, using {default}")
        return default

# App factory: reads configuration from the environment, then wires the components.
def create_app(**overrides):
    config = {
        "API_KEY": os.environ.get("OPENWEATHER_API_KEY", ""),
        "HISTORY_FILE": os.environ.get("WEATHER_HISTORY_FILE", HISTORY_FILE),
        "TIMEOUT": _env_float("WEATHER_TIMEOUT", DEFAULT_TIMEOUT),
        "TYPE_DELAY": _env_float("WEATHER_TYPE_DELAY", TYPE_DELAY),
        "SPINNER_SECONDS": _env_float("WEATHER_SPINNER_SECONDS", SPINNER_SECONDS),
        "STREAM": None,
        "ERROR_STREAM": None,
    }
    config.update(overrides)

    if not config["API_KEY"]:
        logger.warning("OPENWEATHER_API_KEY is not set; the provider will reject requests")

    display = ConsoleDisplay(delay=config["TYPE_DELAY"], stream=config["STREAM"])
    history = HistoryStore(config["HISTORY_FILE"])
    progress = None
    if config["SPINNER_SECONDS"] > 0:
        progress = partial(display.spinner, duration=config["SPINNER_SECONDS"])
    client = WeatherClient(
        api_key=config["API_KEY"],
        history=history,
        timeout=config["TIMEOUT"],
        progress=progress,
    )
    return WeatherApp(client, history, display, error_stream=config["ERROR_STREAM"])


def main() -> int:
    # .env first so LOG_LEVEL and the provider key can come from it.
    load_dotenv()
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "WARNING").upper(),
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )
    app = create_app()
    return app.run()

if __name__ == "__main__":
    raise SystemExit(main())
