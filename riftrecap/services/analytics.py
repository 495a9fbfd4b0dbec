from collections import Counter
from datetime import datetime, timezone
from functools import reduce
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple
import logging
import math

from riftrecap.config import LOG_LEVEL, SIGNIFICANT_MONTH_MIN_GAMES
from riftrecap.models import (
  ChampionStat,
  CurrentStreak,
  HighlightMatches,
  MasteryRecord,
  MatchRecord,
  MonthlyData,
  Overview,
  PerformanceMetrics,
  PlayerAnalytics,
  Streaks,
  TemporalTrends,
  WeeklyData,
)

log = logging.getLogger("analytics")
if not log.handlers:
  h = logging.StreamHandler()
  h.setFormatter(logging.Formatter("[AN] %(levelname)s: %(message)s"))
  log.addHandler(h)
  log.setLevel(LOG_LEVEL)

UNKNOWN_ROLE = "UNKNOWN"

# ----------------------------
# Helpers
# ----------------------------
def calculate_kda(kills: int, deaths: int, assists: int) -> float:
  """(K + A) / D, or K + A for a deathless record."""
  if deaths == 0:
    return float(kills + assists)
  return (kills + assists) / deaths

def _rate(wins: int, games: int) -> float:
  return wins / games * 100 if games > 0 else 0.0

def _utc(epoch_ms: int) -> datetime:
  return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)

def month_key(epoch_ms: int) -> str:
  """'2024-01' for any instant in January 2024 (UTC)."""
  return _utc(epoch_ms).strftime("%Y-%m")

def week_key(epoch_ms: int) -> str:
  """'2024-W03' style bucket, week number counted from the day of the year (UTC)."""
  dt = _utc(epoch_ms)
  jan1 = datetime(dt.year, 1, 1, tzinfo=timezone.utc)
  jan1_weekday = (jan1.weekday() + 1) % 7  # Sunday = 0
  past_days = (dt - jan1).total_seconds() / 86400
  week = math.ceil((past_days + jan1_weekday + 1) / 7)
  return f"{dt.year}-W{week:02d}"

# ----------------------------
# Overview
# ----------------------------
def aggregate_overview(matches: Sequence[MatchRecord]) -> Overview:
  n = len(matches)
  if n == 0:
    return Overview()

  wins = sum(1 for m in matches if m.participant.win)
  k = sum(m.participant.kills for m in matches)
  d = sum(m.participant.deaths for m in matches)
  a = sum(m.participant.assists for m in matches)
  seconds = sum(m.gameDurationSeconds for m in matches)

  return Overview(
    totalGames=n,
    totalWins=wins,
    totalLosses=n - wins,
    winRate=_rate(wins, n),
    avgKDA=calculate_kda(k, d, a),
    avgKills=k / n,
    avgDeaths=d / n,
    avgAssists=a / n,
    totalPlaytimeHours=seconds / 3600,
  )

# ----------------------------
# Per-champion table
# ----------------------------
def aggregate_champion_stats(
    matches: Sequence[MatchRecord],
    masteries: Iterable[MasteryRecord] = (),
) -> List[ChampionStat]:
  mastery_by_id: Dict[int, MasteryRecord] = {m.championId: m for m in masteries}

  # dicts keep first-seen order, which the stable sort below relies on
  per: Dict[int, dict] = {}
  for m in matches:
    you = m.participant
    r = per.setdefault(you.championId, {
      "name": you.championName,
      "games": 0, "wins": 0,
      "k": 0, "d": 0, "a": 0,
      "time": 0,
    })
    r["games"] += 1
    r["wins"] += 1 if you.win else 0
    r["k"] += you.kills
    r["d"] += you.deaths
    r["a"] += you.assists
    r["time"] += m.gameDurationSeconds

  rows: List[ChampionStat] = []
  for champ_id, r in per.items():
    n = r["games"]
    mastery = mastery_by_id.get(champ_id)
    rows.append(ChampionStat(
      championId=champ_id,
      championName=r["name"],
      games=n,
      wins=r["wins"],
      losses=n - r["wins"],
      winRate=_rate(r["wins"], n),
      avgKDA=calculate_kda(r["k"], r["d"], r["a"]),
      avgKills=r["k"] / n,
      avgDeaths=r["d"] / n,
      avgAssists=r["a"] / n,
      totalPlaytimeHours=r["time"] / 3600,
      masteryLevel=mastery.championLevel if mastery else None,
      masteryPoints=mastery.championPoints if mastery else None,
    ))

  rows.sort(key=lambda row: row.games, reverse=True)
  return rows

# ----------------------------
# Per-minute metrics
# ----------------------------
def aggregate_performance_metrics(matches: Sequence[MatchRecord]) -> PerformanceMetrics:
  n = len(matches)
  if n == 0:
    return PerformanceMetrics()

  minutes = sum(m.gameDurationSeconds for m in matches) / 60
  vision = sum(m.participant.visionScore for m in matches)
  dmg = sum(m.participant.totalDamageDealt for m in matches)
  gold = sum(m.participant.goldEarned for m in matches)
  cs = sum(m.participant.totalMinionsKilled for m in matches)

  def per_min(total: int) -> float:
    return total / minutes if minutes > 0 else 0.0

  return PerformanceMetrics(
    # per game, not per minute
    avgVisionScore=vision / n,
    avgDamagePerMinute=per_min(dmg),
    avgGoldPerMinute=per_min(gold),
    avgCSPerMinute=per_min(cs),
  )

# ----------------------------
# Highlight matches
# ----------------------------
def _max_match(
    matches: Iterable[MatchRecord],
    score: Callable[[MatchRecord], float],
) -> Optional[MatchRecord]:
  # strict '>' keeps the earliest match on ties; -1 is below every valid score
  def step(acc: Tuple[float, Optional[MatchRecord]], m: MatchRecord):
    s = score(m)
    return (s, m) if s > acc[0] else acc
  return reduce(step, matches, (-1, None))[1]

def find_highlight_matches(matches: Sequence[MatchRecord]) -> HighlightMatches:
  return HighlightMatches(
    bestKDA=_max_match(matches, lambda m: calculate_kda(m.participant.kills, m.participant.deaths, m.participant.assists)),
    mostKills=_max_match(matches, lambda m: m.participant.kills),
    longestGame=_max_match(matches, lambda m: m.gameDurationSeconds),
    highestDamage=_max_match(matches, lambda m: m.participant.totalDamageDealt),
  )

# ----------------------------
# Temporal trends
# ----------------------------
def _bucket(matches: Iterable[MatchRecord], key_fn: Callable[[int], str]) -> List[Tuple[str, int, int]]:
  games: Counter = Counter()
  wins: Counter = Counter()
  for m in matches:
    k = key_fn(m.gameCreationTime)
    games[k] += 1
    wins[k] += 1 if m.participant.win else 0
  return [(k, games[k], wins[k]) for k in sorted(games)]

def calculate_temporal_trends(
    matches: Sequence[MatchRecord],
    min_games: int = SIGNIFICANT_MONTH_MIN_GAMES,
) -> TemporalTrends:
  if not matches:
    return TemporalTrends()

  monthly = [
    MonthlyData(month=k, games=g, wins=w, losses=g - w, winRate=_rate(w, g))
    for k, g, w in _bucket(matches, month_key)
  ]
  weekly = [
    WeeklyData(week=k, games=g, wins=w, losses=g - w, winRate=_rate(w, g))
    for k, g, w in _bucket(matches, week_key)
  ]

  best_month = worst_month = ""
  significant = [m for m in monthly if m.games >= min_games]
  if significant:
    by_rate = sorted(significant, key=lambda m: m.winRate, reverse=True)
    best_month = by_rate[0].month
    worst_month = by_rate[-1].month

  return TemporalTrends(
    monthlyWinRate=monthly,
    weeklyPerformance=weekly,
    bestMonth=best_month,
    worstMonth=worst_month,
  )

# ----------------------------
# Streaks
# ----------------------------
def calculate_streaks(matches: Sequence[MatchRecord]) -> Streaks:
  if not matches:
    return Streaks()

  win_run = loss_run = 0
  longest_win = longest_loss = 0
  for m in sorted(matches, key=lambda m: m.gameCreationTime):
    if m.participant.win:
      win_run += 1
      loss_run = 0
      longest_win = max(longest_win, win_run)
    else:
      loss_run += 1
      win_run = 0
      longest_loss = max(longest_loss, loss_run)

  if win_run > 0:
    current = CurrentStreak(type="win", count=win_run)
  else:
    current = CurrentStreak(type="loss", count=loss_run)

  return Streaks(
    longestWinStreak=longest_win,
    longestLossStreak=longest_loss,
    currentStreak=current,
  )

# ----------------------------
# Roles
# ----------------------------
def calculate_role_distribution(matches: Iterable[MatchRecord]) -> Dict[str, int]:
  return dict(Counter((m.participant.role or UNKNOWN_ROLE) for m in matches))

# ----------------------------
# Entry point
# ----------------------------
def aggregate(
    matches: Sequence[MatchRecord],
    masteries: Iterable[MasteryRecord] = (),
) -> PlayerAnalytics:
  """
  Build the full year profile from the tracked player's matches.

  Highlight matches are the input records themselves, not copies.
  Zero matches yields the all-zero profile without running any reducer.
  """
  matches = list(matches)
  if not matches:
    log.info("No matches to aggregate, returning empty profile")
    return PlayerAnalytics()

  analytics = PlayerAnalytics(
    overview=aggregate_overview(matches),
    championStats=aggregate_champion_stats(matches, masteries),
    temporalTrends=calculate_temporal_trends(matches),
    performanceMetrics=aggregate_performance_metrics(matches),
    streaks=calculate_streaks(matches),
    roleDistribution=calculate_role_distribution(matches),
    highlightMatches=find_highlight_matches(matches),
  )
  log.info("Aggregated %d games, %.1f%% WR, %d champions",
           analytics.overview.totalGames, analytics.overview.winRate, len(analytics.championStats))
  return analytics
