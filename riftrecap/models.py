from pydantic import BaseModel, ConfigDict, Field, model_serializer
from typing import Dict, List, Literal, Optional


# ----------------------------
# Input records
# ----------------------------
class Participant(BaseModel):
  championId: int
  championName: str = ""
  kills: int = Field(0, ge=0)
  deaths: int = Field(0, ge=0)
  assists: int = Field(0, ge=0)
  win: bool = False
  visionScore: int = Field(0, ge=0)
  totalDamageDealt: int = Field(0, ge=0)
  goldEarned: int = Field(0, ge=0)
  totalMinionsKilled: int = Field(0, ge=0)
  role: str = "UNKNOWN"


class MatchRecord(BaseModel):
  matchId: str
  gameCreationTime: int
  gameDurationSeconds: int = Field(0, ge=0)
  queueId: int = 0
  gameMode: str = ""
  participant: Participant


class MasteryRecord(BaseModel):
  championId: int
  championName: str = ""
  championLevel: int = Field(1, ge=1, le=7)
  championPoints: int = Field(0, ge=0)


# ----------------------------
# Aggregated profile
# ----------------------------
class _Frozen(BaseModel):
  model_config = ConfigDict(frozen=True)


class Overview(_Frozen):
  totalGames: int = 0
  totalWins: int = 0
  totalLosses: int = 0
  winRate: float = 0.0
  avgKDA: float = 0.0
  avgKills: float = 0.0
  avgDeaths: float = 0.0
  avgAssists: float = 0.0
  totalPlaytimeHours: float = 0.0


class ChampionStat(_Frozen):
  championId: int
  championName: str
  games: int
  wins: int
  losses: int
  winRate: float
  avgKDA: float
  avgKills: float
  avgDeaths: float
  avgAssists: float
  totalPlaytimeHours: float
  masteryLevel: Optional[int] = None
  masteryPoints: Optional[int] = None

  @model_serializer(mode="wrap")
  def drop_unknown_mastery(self, handler):
    # unknown mastery is absent, never 0
    data = handler(self)
    for k in ("masteryLevel", "masteryPoints"):
      if data.get(k) is None:
        data.pop(k, None)
    return data


class MonthlyData(_Frozen):
  month: str
  games: int
  wins: int
  losses: int
  winRate: float


class WeeklyData(_Frozen):
  week: str
  games: int
  wins: int
  losses: int
  winRate: float


class TemporalTrends(_Frozen):
  monthlyWinRate: List[MonthlyData] = []
  weeklyPerformance: List[WeeklyData] = []
  bestMonth: str = ""
  worstMonth: str = ""


class PerformanceMetrics(_Frozen):
  avgVisionScore: float = 0.0
  avgDamagePerMinute: float = 0.0
  avgGoldPerMinute: float = 0.0
  avgCSPerMinute: float = 0.0


class CurrentStreak(_Frozen):
  type: Literal["win", "loss"] = "win"
  count: int = 0


class Streaks(_Frozen):
  longestWinStreak: int = 0
  longestLossStreak: int = 0
  currentStreak: CurrentStreak = Field(default_factory=CurrentStreak)


class HighlightMatches(_Frozen):
  bestKDA: Optional[MatchRecord] = None
  mostKills: Optional[MatchRecord] = None
  longestGame: Optional[MatchRecord] = None
  highestDamage: Optional[MatchRecord] = None


class PlayerAnalytics(_Frozen):
  overview: Overview = Field(default_factory=Overview)
  championStats: List[ChampionStat] = []
  temporalTrends: TemporalTrends = Field(default_factory=TemporalTrends)
  performanceMetrics: PerformanceMetrics = Field(default_factory=PerformanceMetrics)
  streaks: Streaks = Field(default_factory=Streaks)
  roleDistribution: Dict[str, int] = {}
  highlightMatches: HighlightMatches = Field(default_factory=HighlightMatches)


# ----------------------------
# Insights
# ----------------------------
class AIInsights(BaseModel):
  summary: str = ""
  strengths: List[str] = []
  weaknesses: List[str] = []
  improvementAreas: List[str] = []
  coachingTips: List[str] = []
  roast: str = ""
  boast: str = ""
  hiddenGems: List[str] = []
  yearInReview: str = ""
  shareableQuote: str = ""


# ----------------------------
# HTTP bodies
# ----------------------------
class AnalyticsRequest(BaseModel):
  matches: List[MatchRecord] = []
  masteries: List[MasteryRecord] = []


class RawAnalyticsRequest(BaseModel):
  puuid: str = ""
  matches: List[dict] = []
  masteries: List[dict] = []


class RecapResponse(BaseModel):
  analytics: PlayerAnalytics
  insights: AIInsights
