import logging
from typing import Any, Callable, Dict, List, Optional

from riftrecap.config import LOG_LEVEL
from riftrecap.models import AIInsights, PlayerAnalytics

log = logging.getLogger("insights")
if not log.handlers:
  h = logging.StreamHandler()
  h.setFormatter(logging.Formatter("[IN] %(levelname)s: %(message)s"))
  log.addHandler(h)
  log.setLevel(LOG_LEVEL)

#external language-model collaborator: analytics in, loose JSON dict out
InsightGenerator = Callable[[PlayerAnalytics], Dict[str, Any]]

_LIST_FIELDS = ("strengths", "weaknesses", "improvementAreas", "coachingTips", "hiddenGems")
_TEXT_FIELDS = ("roast", "boast", "shareableQuote")


# ----------------------------
# Rule-based insights
# ----------------------------
def _strengths(a: PlayerAnalytics, top_champ: str, top_games: int) -> List[str]:
  o, pm, st = a.overview, a.performanceMetrics, a.streaks
  top = a.championStats[0] if a.championStats else None
  out = []
  if o.winRate > 52: out.append(f"Strong {o.winRate:.1f}% win rate shows consistent performance")
  if o.avgKDA > 3: out.append(f"Excellent {o.avgKDA:.2f} KDA demonstrates good decision-making")
  if st.longestWinStreak >= 5: out.append(f"Impressive {st.longestWinStreak}-game win streak shows momentum")
  if pm.avgVisionScore > 40: out.append("Good vision control with strong ward placement")
  if top and top.winRate > 55: out.append(f"Dominant on {top_champ} with {top.winRate:.1f}% win rate")

  padding = [
    "Consistent gameplay throughout the season",
    "Team-oriented playstyle",
    f"Dedicated {top_champ} player with {top_games} games",
  ]
  while len(out) < 3:
    out.append(padding[len(out)])
  return out[:3]

def _weaknesses(a: PlayerAnalytics) -> List[str]:
  o, pm, st = a.overview, a.performanceMetrics, a.streaks
  out = []
  if o.winRate < 48: out.append("Win rate below 50% indicates room for improvement")
  if o.avgDeaths > 6: out.append(f"High death average ({o.avgDeaths:.1f}) suggests positioning issues")
  if pm.avgVisionScore < 30: out.append("Low vision score - need more ward placement")
  if pm.avgCSPerMinute < 5: out.append(f"CS/min of {pm.avgCSPerMinute:.1f} needs improvement")
  if st.longestLossStreak >= 5: out.append(f"{st.longestLossStreak}-game loss streak shows tilt issues")

  padding = [
    "Champion pool could be more diverse",
    "Objective control needs attention",
    "Map awareness could be improved",
  ]
  while len(out) < 3:
    out.append(padding[len(out)])
  return out[:3]

def _roast(a: PlayerAnalytics) -> str:
  o, pm, st = a.overview, a.performanceMetrics, a.streaks
  if o.avgDeaths > 7:
    return f"{o.avgDeaths:.1f} deaths per game? The enemy team should send you a thank-you card for all that gold."
  if st.longestLossStreak >= 7:
    return f"A {st.longestLossStreak}-game loss streak? Even your keyboard wanted to uninstall."
  if o.winRate < 45:
    return f"With a {o.winRate:.0f}% win rate, you're giving the enemy team more LP than your own team."
  if pm.avgCSPerMinute < 4:
    return f"{pm.avgCSPerMinute:.1f} CS/min? The minions are farming you at this point."
  return "Your performance is decent, but we both know you can do better. Time to step it up!"

def _boast(a: PlayerAnalytics, top_champ: str) -> str:
  o, st = a.overview, a.streaks
  top = a.championStats[0] if a.championStats else None
  if o.winRate > 55:
    return f"{o.winRate:.0f}% win rate? You're not just climbing, you're taking the elevator!"
  if st.longestWinStreak >= 7:
    return f"A {st.longestWinStreak}-game win streak! You were absolutely unstoppable during that run."
  if o.avgKDA > 4:
    return f"{o.avgKDA:.2f} KDA is seriously impressive. You're playing like a pro!"
  if top and top.winRate > 60:
    return f"{top.winRate:.0f}% win rate on {top_champ}? You've mastered that champion!"
  return f"{o.totalGames} games shows real dedication. Keep grinding and the results will come!"

def generate_fallback_insights(analytics: PlayerAnalytics) -> AIInsights:
  """Threshold-rule insights from the profile alone; no network."""
  o, pm, st, tt = analytics.overview, analytics.performanceMetrics, analytics.streaks, analytics.temporalTrends
  top = analytics.championStats[0] if analytics.championStats else None
  top_champ = top.championName if top else "your favorite champion"
  top_games = top.games if top else 0

  improvement_areas = [
    "Reduce deaths by improving positioning and map awareness" if o.avgDeaths > 5
      else "Optimize champion pool for current meta",
    "Increase vision score through consistent warding" if pm.avgVisionScore < 35
      else "Improve CS efficiency in lane",
    "Focus on win conditions and objective control" if o.winRate < 50
      else "Expand champion pool for flexibility",
  ]

  coaching_tips = [
    f"Focus on your best champions - {top_champ} has been your most successful",
    "Buy control wards every back and place them in high-traffic areas" if pm.avgVisionScore < 35
      else "Maintain your strong vision control to enable team plays",
    "Review deaths in replays to identify positioning mistakes" if o.avgDeaths > 5
      else "Continue your disciplined playstyle with low deaths",
    "Practice last-hitting in practice tool to improve CS/min" if pm.avgCSPerMinute < 6
      else "Your CS is solid - focus on translating farm leads into objectives",
    "Take breaks after 2 losses to avoid tilt and maintain mental" if st.longestLossStreak >= 4
      else "Keep your mental strong and focus on improvement over wins",
  ]

  hidden_gems = [
    c.championName for c in analytics.championStats
    if 5 <= c.games <= 20 and c.winRate > 55
  ][:2]

  parts = [
    f"This year you played {o.totalGames} ranked games over {o.totalPlaytimeHours:.0f} hours, "
    f"with {top_champ} as your most-played champion ({top_games} games).",
    f"Your {o.winRate:.1f}% win rate and {o.avgKDA:.2f} KDA demonstrate "
    f"{'solid climbing potential' if o.winRate > 50 else 'room for growth'}.",
  ]
  if tt.bestMonth:
    parts.append(f"Your best month was {tt.bestMonth}, where you really hit your stride.")
  if st.longestWinStreak >= 5:
    parts.append(f"Your {st.longestWinStreak}-game win streak was a highlight of the season!")
  year_in_review = " ".join(parts)

  return AIInsights(
    summary=year_in_review,
    strengths=_strengths(analytics, top_champ, top_games),
    weaknesses=_weaknesses(analytics),
    improvementAreas=improvement_areas,
    coachingTips=coaching_tips,
    roast=_roast(analytics),
    boast=_boast(analytics, top_champ),
    hiddenGems=hidden_gems,
    yearInReview=year_in_review,
    shareableQuote=f"{o.totalGames} ranked games, {o.winRate:.0f}% WR, {o.avgKDA:.1f} KDA on {top_champ}. My Rift Rewind!",
  )

# ----------------------------
# Collaborator wrapper
# ----------------------------
def _ensure_list(x) -> List[str]:
  if isinstance(x, list): return [str(v) for v in x]
  return []

def coerce_insights(d: Dict[str, Any]) -> AIInsights:
  d = d or {}
  review = d.get("yearInReview") or d.get("summary") or ""
  out = {k: _ensure_list(d.get(k)) for k in _LIST_FIELDS}
  out.update({k: str(d.get(k) or "") for k in _TEXT_FIELDS})
  return AIInsights(summary=review, yearInReview=review, **out)

def generate_insights(
    analytics: PlayerAnalytics,
    generator: Optional[InsightGenerator] = None,
) -> AIInsights:
  if generator is None:
    return generate_fallback_insights(analytics)
  try:
    raw = generator(analytics)
  except Exception as e:
    log.error("Insight generator failed: %s", e)
    raw = None
  if not raw:
    log.info("Falling back to rule-based insights")
    return generate_fallback_insights(analytics)
  return coerce_insights(raw)
