import os
from dotenv import load_dotenv

load_dotenv()

#ranked queue ids kept by the ingestion filter
QUEUES = {
  "solo": [420],
  "flex": [440],
}

_DEFAULT_RANKED = ",".join(str(q) for qs in QUEUES.values() for q in qs)
RANKED_QUEUES = tuple(
  int(q) for q in os.getenv("RANKED_QUEUES", _DEFAULT_RANKED).split(",") if q.strip()
)

#recap window, trailing days from now
RECAP_WINDOW_DAYS = int(os.getenv("RECAP_WINDOW_DAYS", "365"))

#months with fewer games are ignored for best/worst month
SIGNIFICANT_MONTH_MIN_GAMES = int(os.getenv("SIGNIFICANT_MONTH_MIN_GAMES", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

#champion-name cache
CHAMPION_CACHE_TTL = int(os.getenv("CHAMPION_CACHE_TTL", "86400"))
