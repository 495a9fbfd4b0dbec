import time

import pytest
from fastapi.testclient import TestClient

from riftrecap.main import app

PUUID = "route-puuid"


@pytest.fixture
def client():
  return TestClient(app)


def _record(match_id, champion_id=1, win=True, kills=5):
  return {
    "matchId": match_id,
    "gameCreationTime": 1_705_320_000_000,
    "gameDurationSeconds": 1800,
    "queueId": 420,
    "participant": {
      "championId": champion_id,
      "championName": "Annie",
      "kills": kills,
      "deaths": 2,
      "assists": 7,
      "win": win,
      "visionScore": 25,
      "totalDamageDealt": 21000,
      "goldEarned": 11000,
      "totalMinionsKilled": 170,
      "role": "MIDDLE",
    },
  }


def _raw(match_id, created_ms, queue=420):
  return {
    "metadata": {"matchId": match_id},
    "info": {
      "gameCreation": created_ms,
      "gameDuration": 1500,
      "gameMode": "CLASSIC",
      "queueId": queue,
      "participants": [{
        "puuid": PUUID, "championId": 22, "championName": "Ashe",
        "kills": 6, "deaths": 4, "assists": 10, "win": True,
        "visionScore": 30, "totalDamageDealtToChampions": 18000,
        "goldEarned": 10500, "totalMinionsKilled": 160, "neutralMinionsKilled": 4,
        "teamPosition": "BOTTOM",
      }],
    },
  }


def test_health(client):
  r = client.get("/api/health")
  assert r.status_code == 200
  assert r.text == "ok"

def test_analytics_from_records(client):
  body = {
    "matches": [_record("m1", win=True), _record("m2", champion_id=2, win=False, kills=12)],
    "masteries": [{"championId": 1, "championName": "Annie", "championLevel": 6, "championPoints": 80000}],
  }
  r = client.post("/api/analytics", json=body)
  assert r.status_code == 200
  data = r.json()

  a = data["analytics"]
  assert a["overview"]["totalGames"] == 2
  assert a["overview"]["winRate"] == 50
  stats = {c["championId"]: c for c in a["championStats"]}
  assert stats[1]["masteryLevel"] == 6
  assert "masteryLevel" not in stats[2]
  assert a["highlightMatches"]["mostKills"]["matchId"] == "m2"
  assert a["roleDistribution"] == {"MIDDLE": 2}
  assert len(data["insights"]["coachingTips"]) == 5

def test_analytics_empty_body(client):
  r = client.post("/api/analytics", json={})
  assert r.status_code == 200
  a = r.json()["analytics"]
  assert a["overview"]["totalGames"] == 0
  assert a["championStats"] == []
  assert a["streaks"]["currentStreak"] == {"type": "win", "count": 0}
  assert all(v is None for v in a["highlightMatches"].values())

def test_analytics_rejects_negative_counts(client):
  bad = _record("m1")
  bad["participant"]["deaths"] = -1
  r = client.post("/api/analytics", json={"matches": [bad]})
  assert r.status_code == 422

def test_raw_requires_puuid(client):
  r = client.post("/api/analytics/raw", json={"matches": []})
  assert r.status_code == 400

def test_raw_filters_then_aggregates(client):
  now = int(time.time() * 1000)
  day = 24 * 60 * 60 * 1000
  body = {
    "puuid": PUUID,
    "matches": [
      _raw("r1", now - 3 * day),
      _raw("r1", now - 3 * day),
      _raw("aram", now - 2 * day, queue=450),
      _raw("r2", now - day, queue=440),
    ],
    "masteries": [{"championId": 22, "championLevel": 5, "championPoints": 40000}],
  }
  r = client.post("/api/analytics/raw", json=body)
  assert r.status_code == 200
  a = r.json()["analytics"]

  assert a["overview"]["totalGames"] == 2
  champ = a["championStats"][0]
  assert champ["championName"] == "Ashe"
  assert champ["masteryPoints"] == 40000
  assert a["roleDistribution"] == {"BOTTOM": 2}
  assert a["performanceMetrics"]["avgCSPerMinute"] == pytest.approx(164 * 2 / 50)

def test_raw_with_nothing_ranked_is_still_a_recap(client):
  now = int(time.time() * 1000)
  body = {"puuid": PUUID, "matches": [_raw("aram", now, queue=450)]}
  r = client.post("/api/analytics/raw", json=body)
  assert r.status_code == 200
  assert r.json()["analytics"]["overview"]["totalGames"] == 0
