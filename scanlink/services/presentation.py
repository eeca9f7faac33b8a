"""Display helpers built on top of an AnalyticsSummary.

None of this feeds back into stored data; it shapes analytics for
dashboards (daily counts, masked addresses, readable user agents).
"""

from collections import Counter
from typing import List, Optional

from sqlmodel import SQLModel

from scanlink.services.analytics import AnalyticsSummary

MAX_TIMELINE_DATES = 10
MAX_REPORT_SCANS = 20


class TimelinePoint(SQLModel):
    date: str
    count: int


class ScanView(SQLModel):
    timestamp: str
    ip: str
    device: str


class ScanReport(SQLModel):
    id: str
    original_url: str
    total_scans: int
    unique_scans: int
    scans_by_date: List[TimelinePoint]
    recent_scans: List[ScanView]


def mask_ip(ip: Optional[str]) -> str:
    """Partially mask an address: ``a.b.***.***`` for IPv4, half otherwise."""
    if not ip:
        return "Unknown"
    parts = ip.split(".")
    if len(parts) == 4:
        return f"{parts[0]}.{parts[1]}.***.***"
    return ip[: len(ip) // 2] + "***"


def describe_user_agent(user_agent: Optional[str]) -> str:
    """Best-effort ``"<Browser> on <Device>"`` summary of a user agent."""
    if not user_agent:
        return "Unknown"
    
    browser = "Unknown"
    for name in ("Chrome", "Firefox", "Safari", "Edge"):
        if name in user_agent:
            browser = name
            break
    
    device = "Desktop"
    if "Mobile" in user_agent:
        device = "Mobile"
    elif "Tablet" in user_agent:
        device = "Tablet"
    
    return f"{browser} on {device}"


def scans_by_date(summary: AnalyticsSummary, max_dates: int = MAX_TIMELINE_DATES) -> List[TimelinePoint]:
    """Count recent scans per calendar date, newest date first."""
    counts = Counter(scan.timestamp.date() for scan in summary.scans)
    return [
        TimelinePoint(date=day.isoformat(), count=count)
        for day, count in sorted(counts.items(), reverse=True)[:max_dates]
    ]


def build_report(summary: AnalyticsSummary) -> ScanReport:
    return ScanReport(
        id=summary.id,
        original_url=summary.original_url,
        total_scans=summary.total_scans,
        unique_scans=summary.unique_scans,
        scans_by_date=scans_by_date(summary),
        recent_scans=[
            ScanView(
                timestamp=scan.timestamp.isoformat(),
                ip=mask_ip(scan.ip),
                device=describe_user_agent(scan.user_agent),
            )
            for scan in summary.scans[:MAX_REPORT_SCANS]
        ],
    )
