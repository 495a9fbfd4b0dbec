# riftrecap/routes/recap.py
import logging

from fastapi import APIRouter, HTTPException

from riftrecap.config import LOG_LEVEL
from riftrecap.models import AnalyticsRequest, RawAnalyticsRequest, RecapResponse
from riftrecap.services.analytics import aggregate
from riftrecap.services.insights import generate_insights
from riftrecap.services.match_parser import prepare_masteries, prepare_matches
from riftrecap.util.champion_cache import ChampionNameCache

log = logging.getLogger("recap")
if not log.handlers:
  h = logging.StreamHandler()
  h.setFormatter(logging.Formatter("[RC] %(levelname)s: %(message)s"))
  log.addHandler(h)
  log.setLevel(LOG_LEVEL)

router = APIRouter(prefix="/api", tags=["recap"])

#process-wide; no loader wired, so names come from the static table
CHAMPION_NAMES = ChampionNameCache()


@router.post("/analytics", response_model=RecapResponse)
async def analytics_from_records(body: AnalyticsRequest):
  """Aggregate already-shaped match records into a recap."""
  analytics = aggregate(body.matches, body.masteries)
  return RecapResponse(analytics=analytics, insights=generate_insights(analytics))


@router.post("/analytics/raw", response_model=RecapResponse)
async def analytics_from_riot_payloads(body: RawAnalyticsRequest):
  """
  Example body:
    {"puuid": "...", "matches": [<match-v5 json>, ...], "masteries": [<mastery-v4 json>, ...]}
  """
  puuid = body.puuid.strip()
  if not puuid:
    raise HTTPException(400, "puuid is required to locate the player in each match")

  matches = prepare_matches(body.matches, puuid)
  masteries = prepare_masteries(body.masteries, CHAMPION_NAMES)
  log.info("Recap for %s: %d/%d matches kept, %d masteries",
           puuid[:8], len(matches), len(body.matches), len(masteries))

  analytics = aggregate(matches, masteries)
  return RecapResponse(analytics=analytics, insights=generate_insights(analytics))
