import logging
from datetime import datetime

from errors import HistoryError
from models import HistoryEntry

logger = logging.getLogger(__name__)

HISTORY_FILE = "weather_history.txt"

class HistoryStore:
    """
    Append-only plain-text log of searched cities, one
    "<city> at YYYY-MM-DD HH:MM:SS" line per successful query.
    The file is never rewritten, compacted or rotated.
    """

    def __init__(self, path: str = HISTORY_FILE):
        self.path = path

    # Writes one entry; failures are logged and swallowed so the caller's menu action still completes.
    def append(self, city: str, now: datetime | None = None):
        entry = HistoryEntry(city=city, timestamp=now or datetime.now())
        try:
            self._write_line(entry.to_line())
        except HistoryError as e:
            logger.error(f"Error saving history: {e}")
            return None
        logger.debug(f"Saved history entry for {city!r}")
        return entry

    # Returns every line oldest-first, or None if nothing has been logged yet.
    def read_all(self) -> list[str] | None:
        try:
            with open(self.path, "r", encoding="utf-8", errors="replace") as f:
                return [line.rstrip("\r\n") for line in f]
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error(f"Error reading history: {e}")
            return []

    def _write_line(self, line: str):
        try:
            with open(self.path, "a", encoding="utf-8", errors="backslashreplace") as f:
                f.write(line + "\n")
        except (OSError, UnicodeError) as e:
            raise HistoryError(f"{self.path}: {e}") from e
