import logging
import time
from typing import Iterable, List, Optional

from pydantic import ValidationError

from riftrecap.config import LOG_LEVEL, RANKED_QUEUES, RECAP_WINDOW_DAYS
from riftrecap.models import MasteryRecord, MatchRecord, Participant
from riftrecap.util.champion_cache import ChampionNameCache

log = logging.getLogger("match_parser")
if not log.handlers:
  h = logging.StreamHandler()
  h.setFormatter(logging.Formatter("[MP] %(levelname)s: %(message)s"))
  log.addHandler(h)
  log.setLevel(LOG_LEVEL)

DAY_MS = 24 * 60 * 60 * 1000
MAX_MASTERY_LEVEL = 7


class MatchParseError(ValueError):
  """Raw payload does not have the Match-V5 / Mastery-V4 shape."""


# ----------------------------
# Match-V5 -> MatchRecord
# ----------------------------
def _role_of(p: dict) -> str:
  return p.get("teamPosition") or p.get("role") or "UNKNOWN"

def parse_match(raw: dict, puuid: str) -> Optional[MatchRecord]:
  """
  Reduce a Match-V5 payload to the tracked player's view.
  Returns None when the player is not in the match.
  """
  if not isinstance(raw, dict) or not isinstance(raw.get("info"), dict):
    raise MatchParseError("match payload has no 'info' block")
  meta = raw.get("metadata") or {}
  info = raw["info"]
  match_id = meta.get("matchId")
  if not match_id:
    raise MatchParseError("match payload has no metadata.matchId")

  participants = [p for p in info.get("participants") or [] if isinstance(p, dict)]
  you = next((p for p in participants if p.get("puuid") == puuid), None)
  if not you:
    log.warning("Player %s not found in match %s", puuid, match_id)
    return None

  try:
    return MatchRecord(
      matchId=match_id,
      gameCreationTime=info.get("gameCreation", 0),
      gameDurationSeconds=info.get("gameDuration", you.get("timePlayed", 0)),
      queueId=info.get("queueId", -1),
      gameMode=info.get("gameMode", ""),
      participant=Participant(
        championId=you.get("championId", 0),
        championName=you.get("championName", ""),
        kills=you.get("kills", 0),
        deaths=you.get("deaths", 0),
        assists=you.get("assists", 0),
        win=bool(you.get("win")),
        visionScore=you.get("visionScore", 0),
        totalDamageDealt=you.get("totalDamageDealtToChampions", 0),
        goldEarned=you.get("goldEarned", 0),
        totalMinionsKilled=(you.get("totalMinionsKilled") or 0) + (you.get("neutralMinionsKilled") or 0),
        role=_role_of(you),
      ),
    )
  except ValidationError as e:
    raise MatchParseError(f"match {match_id}: {e.error_count()} invalid field(s)") from e

def is_ranked(match: MatchRecord) -> bool:
  return match.queueId in RANKED_QUEUES

def prepare_matches(
    raw_matches: Iterable[dict],
    puuid: str,
    *,
    now_ms: Optional[int] = None,
    window_days: int = RECAP_WINDOW_DAYS,
) -> List[MatchRecord]:
  """
  Parse, keep ranked games inside the trailing window, drop repeated match ids.
  Output is oldest first.
  """
  now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
  cutoff = now_ms - window_days * DAY_MS

  seen = set()
  out: List[MatchRecord] = []
  skipped = 0
  for raw in raw_matches:
    try:
      m = parse_match(raw, puuid)
    except MatchParseError as e:
      log.warning("Skipping unparseable match: %s", e)
      skipped += 1
      continue
    if m is None or not is_ranked(m):
      continue
    if m.gameCreationTime < cutoff or m.matchId in seen:
      continue
    seen.add(m.matchId)
    out.append(m)

  out.sort(key=lambda m: m.gameCreationTime)
  log.info("Prepared %d ranked matches (%d skipped)", len(out), skipped)
  return out

# ----------------------------
# Mastery-V4 -> MasteryRecord
# ----------------------------
def parse_mastery(raw: dict, champion_names: ChampionNameCache) -> MasteryRecord:
  if not isinstance(raw, dict) or "championId" not in raw:
    raise MatchParseError("mastery payload has no championId")
  champ_id = raw["championId"]
  level = raw.get("championLevel", 1)
  if isinstance(level, int) and level > MAX_MASTERY_LEVEL:
    level = MAX_MASTERY_LEVEL  # newer accounts report levels past 7
  try:
    return MasteryRecord(
      championId=champ_id,
      championName=champion_names.name(champ_id),
      championLevel=level,
      championPoints=raw.get("championPoints", 0),
    )
  except ValidationError as e:
    raise MatchParseError(f"mastery for champion {champ_id}: {e.error_count()} invalid field(s)") from e

def prepare_masteries(raw_masteries: Iterable[dict], champion_names: ChampionNameCache) -> List[MasteryRecord]:
  out: List[MasteryRecord] = []
  seen = set()
  for raw in raw_masteries:
    try:
      m = parse_mastery(raw, champion_names)
    except MatchParseError as e:
      log.warning("Skipping mastery: %s", e)
      continue
    if m.championId in seen:
      continue
    seen.add(m.championId)
    out.append(m)
  return out
