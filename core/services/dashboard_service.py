"""
Dashboard figures reported by the survey API.
"""
from dataclasses import dataclass, field

from core.utils.helpers import STATUS_COLORS, to_int

PERIODS = ('weekly', 'monthly', 'yearly')
DEFAULT_PERIOD = 'monthly'


@dataclass
class TodayStats:
    clicks: int = 0
    completed: int = 0
    terminated: int = 0
    quota_full: int = 0

    @classmethod
    def from_api(cls, payload):
        payload = payload or {}
        return cls(
            clicks=to_int(payload.get('todayClicks')),
            completed=to_int(payload.get('todayCompleted')),
            terminated=to_int(payload.get('todayTerminated')),
            quota_full=to_int(payload.get('todayQuotaFull')),
        )


@dataclass
class DashboardStats:
    total_surveys: int = 0
    total_clicks: int = 0
    total_submissions: int = 0
    completed_count: int = 0
    terminated_count: int = 0
    quota_full_count: int = 0
    today: TodayStats = field(default_factory=TodayStats)

    @classmethod
    def from_api(cls, payload):
        payload = payload or {}
        return cls(
            total_surveys=to_int(payload.get('totalSurveys')),
            total_clicks=to_int(payload.get('totalClicks')),
            total_submissions=to_int(payload.get('totalSubmissions')),
            completed_count=to_int(payload.get('completedCount')),
            terminated_count=to_int(payload.get('terminatedCount')),
            quota_full_count=to_int(payload.get('quotaFullCount')),
            today=TodayStats.from_api(payload.get('today')),
        )

    def distribution(self):
        """
        Outcome bars for the status breakdown.
        Each width is the share of the three outcome totals, as a percentage.
        """
        rows = [
            ('Completed', self.completed_count, STATUS_COLORS['complete']),
            ('Terminated', self.terminated_count, STATUS_COLORS['terminate']),
            ('Quota Full', self.quota_full_count, STATUS_COLORS['quota_full']),
        ]
        total = max(sum(value for _, value, _ in rows), 1)
        return [
            {'label': label, 'value': value, 'color': color, 'width': round(value / total * 100, 2)}
            for label, value, color in rows
        ]
