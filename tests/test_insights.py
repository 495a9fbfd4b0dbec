"""Rule-based insights must work from the profile alone, with no model endpoint."""

from riftrecap.models import AIInsights, PlayerAnalytics
from riftrecap.services.analytics import aggregate
from riftrecap.services.insights import (
  coerce_insights,
  generate_fallback_insights,
  generate_insights,
)


def _complete(ins: AIInsights):
  assert ins.summary and ins.summary == ins.yearInReview
  assert len(ins.strengths) == 3
  assert len(ins.weaknesses) == 3
  assert len(ins.improvementAreas) == 3
  assert len(ins.coachingTips) == 5
  assert ins.roast
  assert ins.boast
  assert ins.shareableQuote


def test_fallback_for_empty_profile():
  ins = generate_fallback_insights(PlayerAnalytics())

  _complete(ins)
  assert ins.strengths[0] == "Consistent gameplay throughout the season"
  assert ins.strengths[2] == "Dedicated your favorite champion player with 0 games"
  assert ins.weaknesses[0] == "Win rate below 50% indicates room for improvement"
  assert ins.roast.startswith("With a 0% win rate")
  assert ins.boast.startswith("0 games shows real dedication")
  assert ins.hiddenGems == []

def test_fallback_for_strong_player(make_match):
  matches = [
    make_match(win=True, day=f"2024-01-{i + 1:02d}", kills=10, deaths=1, assists=5,
               visionScore=50, totalMinionsKilled=270, championName="Ahri", championId=103)
    for i in range(10)
  ]
  ins = generate_fallback_insights(aggregate(matches))

  _complete(ins)
  assert ins.strengths[0].startswith("Strong 100.0% win rate")
  assert ins.strengths[1].startswith("Excellent 15.00 KDA")
  assert ins.strengths[2].startswith("Impressive 10-game win streak")
  assert ins.boast.startswith("100% win rate?")
  assert ins.hiddenGems == ["Ahri"]
  assert "Ahri" in ins.coachingTips[0]
  assert "2024-01" in ins.yearInReview

def test_fallback_for_struggling_player(make_match):
  matches = [
    make_match(win=False, day=f"2024-02-{i + 1:02d}", kills=1, deaths=9, assists=2,
               visionScore=10, totalMinionsKilled=90)
    for i in range(8)
  ]
  ins = generate_fallback_insights(aggregate(matches))

  _complete(ins)
  assert ins.weaknesses[0] == "Win rate below 50% indicates room for improvement"
  assert ins.weaknesses[1].startswith("High death average (9.0)")
  assert ins.roast.startswith("9.0 deaths per game?")
  assert ins.improvementAreas[0].startswith("Reduce deaths")

def test_generate_insights_without_generator_uses_fallback(make_match):
  a = aggregate([make_match()])
  assert generate_insights(a) == generate_fallback_insights(a)

def test_generate_insights_falls_back_on_error(make_match):
  a = aggregate([make_match()])

  def broken(_):
    raise TimeoutError("model endpoint unavailable")

  assert generate_insights(a, broken) == generate_fallback_insights(a)
  assert generate_insights(a, lambda _: {}) == generate_fallback_insights(a)

def test_generate_insights_coerces_generator_output(make_match):
  a = aggregate([make_match()])
  ins = generate_insights(a, lambda _: {
    "yearInReview": "A big year.",
    "strengths": ["Laning"],
    "coachingTips": "not a list",
    "roast": "Ouch.",
  })

  assert ins.summary == "A big year."
  assert ins.yearInReview == "A big year."
  assert ins.strengths == ["Laning"]
  assert ins.coachingTips == []
  assert ins.weaknesses == []
  assert ins.roast == "Ouch."
  assert ins.boast == ""

def test_coerce_uses_summary_when_review_missing():
  ins = coerce_insights({"summary": "Short."})
  assert ins.yearInReview == "Short."
