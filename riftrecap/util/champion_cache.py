import logging
import time
from typing import Callable, Dict, Mapping, Optional

from riftrecap.config import CHAMPION_CACHE_TTL, LOG_LEVEL

log = logging.getLogger("champion_cache")
if not log.handlers:
  h = logging.StreamHandler()
  h.setFormatter(logging.Formatter("[CC] %(levelname)s: %(message)s"))
  log.addHandler(h)
  log.setLevel(LOG_LEVEL)

#used when the loader is missing or fails
STATIC_CHAMPION_NAMES: Dict[int, str] = {
  1: "Annie", 2: "Olaf", 3: "Galio", 4: "Twisted Fate", 5: "Xin Zhao",
  6: "Urgot", 7: "LeBlanc", 8: "Vladimir", 9: "Fiddlesticks", 10: "Kayle",
  11: "Master Yi", 12: "Alistar", 13: "Ryze", 14: "Sion", 15: "Sivir",
  16: "Soraka", 17: "Teemo", 18: "Tristana", 19: "Warwick", 20: "Nunu",
  21: "Miss Fortune", 22: "Ashe", 23: "Tryndamere", 24: "Jax", 25: "Morgana",
  26: "Zilean", 27: "Singed", 28: "Evelynn", 29: "Twitch", 30: "Karthus",
  31: "Cho'Gath", 32: "Amumu", 33: "Rammus", 34: "Anivia", 35: "Shaco",
  36: "Dr. Mundo", 37: "Sona", 38: "Kassadin", 39: "Irelia", 40: "Janna",
  41: "Gangplank", 42: "Corki", 43: "Karma", 44: "Taric", 45: "Veigar",
  48: "Trundle", 50: "Swain", 51: "Caitlyn", 53: "Blitzcrank", 54: "Malphite",
  55: "Katarina", 56: "Nocturne", 57: "Maokai", 58: "Renekton", 59: "Jarvan IV",
  61: "Orianna", 62: "Wukong", 63: "Brand", 64: "Lee Sin", 67: "Vayne",
  69: "Cassiopeia", 75: "Nasus", 76: "Nidalee", 80: "Pantheon", 81: "Ezreal",
  84: "Akali", 86: "Garen", 89: "Leona", 91: "Talon", 92: "Riven",
  96: "Kog'Maw", 98: "Shen", 99: "Lux", 103: "Ahri", 104: "Graves",
  105: "Fizz", 110: "Varus", 111: "Nautilus", 114: "Fiora", 117: "Lulu",
  119: "Draven", 121: "Kha'Zix", 122: "Darius", 145: "Kai'Sa", 157: "Yasuo",
  202: "Jhin", 222: "Jinx", 236: "Lucian", 238: "Zed", 266: "Aatrox",
  412: "Thresh", 517: "Sylas",
}


class ChampionNameCache:
  """
  Read-through champion id -> display name lookup.

  `loader` returns the full id -> name mapping (Data Dragon or similar) and is
  owned by the caller; it is re-invoked once the cached mapping expires.
  """

  def __init__(self, loader: Optional[Callable[[], Mapping[int, str]]] = None,
               ttl: int = CHAMPION_CACHE_TTL) -> None:
    self._loader = loader
    self._ttl = ttl
    self._names: Dict[int, str] = {}
    self._exp = 0.0

  def _refresh(self) -> None:
    names: Dict[int, str] = dict(STATIC_CHAMPION_NAMES)
    if self._loader is not None:
      try:
        loaded = self._loader() or {}
        names.update({int(k): str(v) for k, v in loaded.items()})
      except Exception as e:
        log.warning("Champion loader failed, using static table: %s", e)
    self._names = names
    self._exp = time.time() + self._ttl

  def name(self, champion_id: int) -> str:
    if time.time() > self._exp:
      self._refresh()
    return self._names.get(champion_id, f"Champion {champion_id}")
