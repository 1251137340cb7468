from __future__ import annotations

from datetime import datetime

from housepoints.services.entries import EntryService
from housepoints.services.reports import ReportService
from tests.conftest import provider_at

AFTER_DEADLINE = datetime(2026, 10, 16, 14, 30)


async def test_render_weekly_summary(session, school, tmp_path):
    await EntryService(provider_at(datetime(2026, 10, 13, 9, 0))).submit(
        session, class_id=school["3A"], house_id=3, points=8, submitted_by_email="ada@school.local"
    )

    service = ReportService(provider_at(AFTER_DEADLINE), tmp_path)
    week_key, text = await service.render_weekly_summary(session)

    assert week_key == "2026-10-12"
    assert "week 2026-10-12 to 2026-10-18" in text
    assert "1. Fire: 8" in text
    assert "Classes still to submit (2):" in text
    assert "- 3B" in text
    assert "3A" not in text.split("Classes still to submit")[1]


async def test_write_weekly_summary_creates_file(session, school, tmp_path):
    reports = tmp_path / "reports"
    path = await ReportService(provider_at(AFTER_DEADLINE), reports).write_weekly_summary(session)

    assert path == reports / "weekly-2026-10-12.txt"
    content = path.read_text(encoding="utf-8")
    assert "Classes still to submit (3):" in content
    assert "- 3A (Ms Ada Byron)" in content
