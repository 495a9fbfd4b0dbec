from datetime import datetime, timezone

import pytest

from riftrecap.models import MatchRecord, Participant


def utc_ms(day: str, hour: int = 12) -> int:
  y, m, d = (int(x) for x in day.split("-"))
  return int(datetime(y, m, d, hour, tzinfo=timezone.utc).timestamp() * 1000)


@pytest.fixture
def at_utc():
  return utc_ms


@pytest.fixture
def make_match():
  """Factory for MatchRecord with sensible defaults; kwargs override participant fields."""
  counter = {"n": 0}

  def _make(
      win: bool = True,
      day: str = "2024-01-15",
      hour: int = 12,
      duration: int = 1800,
      match_id: str = None,
      **participant,
  ) -> MatchRecord:
    counter["n"] += 1
    fields = dict(
      championId=1,
      championName="Annie",
      kills=5,
      deaths=5,
      assists=5,
      win=win,
      visionScore=20,
      totalDamageDealt=20000,
      goldEarned=10000,
      totalMinionsKilled=180,
      role="MIDDLE",
    )
    fields.update(participant)
    return MatchRecord(
      matchId=match_id or f"NA1_{counter['n']}",
      gameCreationTime=utc_ms(day, hour),
      gameDurationSeconds=duration,
      queueId=420,
      gameMode="CLASSIC",
      participant=Participant(**fields),
    )

  return _make
