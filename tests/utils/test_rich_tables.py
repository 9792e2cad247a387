# ABOUTME: Tests for rich table builders
# ABOUTME: Renders tables to a recording console and checks the visible labels

from rich.console import Console

from nikkedex.core.models import Burst, Code, ExtractedNikke, Manufacturer, Position, Rarity, Weapon
from nikkedex.core.service import UpdateReport
from nikkedex.utils.rich_tables import (
    create_error_report_table,
    create_logging_status_table,
    create_nikke_table,
    create_update_summary_table,
    print_rich_table,
)


def _render(table) -> str:
    console = Console(record=True, width=120)
    print_rich_table(console, table)
    return console.export_text()


class TestTables:
    """Test the rendered content of each table."""

    def test_nikke_table_uses_display_names(self):
        record = ExtractedNikke(
            name="Rapi",
            rarity=Rarity.SSR,
            burst=Burst.III,
            squad="Counters",
            code=Code.FIRE,
            weapon_type=Weapon.SUBMACHINE_GUN,
            position=Position.ATTACKER,
            manufacturer=Manufacturer.MISSILIS,
        )
        output = _render(create_nikke_table(record))

        assert "Rapi" in output
        assert "SSR" in output
        assert "Submachine Gun" in output
        assert "III" in output
        assert "Missilis" in output

    def test_error_report_table(self):
        output = _render(create_error_report_table({"rarity": "unknown rarity 'X'"}))

        assert "Extraction Failed" in output
        assert "unknown rarity 'X'" in output

    def test_update_summary(self):
        report = UpdateReport(listed=3, cached=1, added=["Rapi"], failed={"Neon": "404"})
        output = _render(create_update_summary_table(report))

        assert "Update Summary" in output
        assert "Rapi" in output
        assert "Neon" in output

    def test_logging_status_shows_fetch_rate_limit(self):
        status = {
            "mode": "production",
            "log_directory": None,
            "third_party_suppressed": ["httpx"],
            "log_files": {"main": None, "json": None, "errors": None},
        }

        assert "2.5 req/s" in _render(
            create_logging_status_table(status, {"rate_limiter": {"calls_per_second": 2.5, "last_call_time": 0.0}})
        )
        assert "disabled" in _render(
            create_logging_status_table(status, {"rate_limiter": {"calls_per_second": 0.0, "last_call_time": 0.0}})
        )
        assert "Fetch Rate Limit" not in _render(create_logging_status_table(status))
