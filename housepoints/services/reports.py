# housepoints/services/reports.py
"""Weekly plain-text summary written after the Friday deadline."""
from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession

from housepoints.services.scoreboard import ScoreboardService
from housepoints.utils.clock import TimeProvider

log = logging.getLogger(__name__)


class ReportService:
    def __init__(self, provider: TimeProvider, reports_dir: Path) -> None:
        self.provider = provider
        self.reports_dir = Path(reports_dir)
        self.scoreboard = ScoreboardService(provider)

    async def render_weekly_summary(self, session: AsyncSession) -> tuple[str, str]:
        """Returns (week_start iso, report text)."""
        board = await self.scoreboard.scoreboard(session, "week")
        missing = await self.scoreboard.missing_classes(session)

        rng = board.period
        lines = [
            f"House points: week {rng.start.isoformat()} to {rng.end.isoformat()}",
            f"Generated {self.provider.now().isoformat(sep=' ')} ({self.provider.timezone})",
            "",
        ]
        for rank, h in enumerate(board.houses, start=1):
            lines.append(f"{rank}. {h.name}: {h.points}")

        lines.append("")
        if missing:
            lines.append(f"Classes still to submit ({len(missing)}):")
            for klass in missing:
                teacher = klass.teacher_display_name
                lines.append(f"- {klass.name}" + (f" ({teacher})" if teacher else ""))
        else:
            lines.append("Every class has submitted.")

        return rng.start.isoformat(), "\n".join(lines) + "\n"

    def write_report(self, week_key: str, content: str) -> Path:
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        path = self.reports_dir / f"weekly-{week_key}.txt"
        path.write_text(content, encoding="utf-8")
        return path

    async def write_weekly_summary(self, session: AsyncSession) -> Path:
        week_key, content = await self.render_weekly_summary(session)
        path = self.write_report(week_key, content)
        log.info("Weekly summary written to %s", path)
        return path
