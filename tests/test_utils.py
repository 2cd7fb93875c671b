import json
from datetime import datetime

import pytest

from utils.app_config import get_db_folder, get_log_level, load_config
from utils.currency import InvalidAmountError, format_currency, format_percent, parse_amount
from utils.date_helpers import (
    add_months, format_list_date, format_range_caption, parse_time, start_of_iso_week,
)


class TestParseAmount:
    @pytest.mark.parametrize("text, expected", [
        ("12.34", 12.34),
        (" 12,34 ", 12.34),
        ("7", 7.0),
        (".5", 0.5),
        ("5.", 5.0),
        ("-3", -3.0),
        ("1e3", 1000.0),
    ])
    def test_valid(self, text, expected):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", [
        None, "", "12 34", "1,234.56", "Infinity", "0x10",
        "\u0661\u0662",  # Arabic-Indic digits
        "\uff11\uff12",  # fullwidth digits
    ])
    def test_invalid(self, text):
        with pytest.raises(InvalidAmountError) as info:
            parse_amount(text)
        assert str(info.value) == "Please enter numbers only (example: 12.34)."


class TestFormatting:
    def test_known_symbols(self):
        assert format_currency(1234.5, "USD") == "$1,234.50"
        assert format_currency(3, "GBP") == "£3.00"
        assert format_currency(-3, "INR") == "-₹3.00"

    def test_unknown_code_used_as_prefix(self):
        assert format_currency(2, "EUR") == "EUR 2.00"

    def test_percent_truncates(self):
        assert format_percent(2, 3) == "66%"
        assert format_percent(1, 0) == ""


class TestDates:
    REF = datetime(2026, 3, 18, 15, 30)

    def test_list_date_today_shows_time(self):
        assert format_list_date(datetime(2026, 3, 18, 9, 5), self.REF) == "9:05 AM"

    def test_list_date_this_year(self):
        assert format_list_date(datetime(2026, 1, 4, 9, 5), self.REF) == "Jan 4"

    def test_list_date_other_year(self):
        assert format_list_date(datetime(2024, 12, 25), self.REF) == "Dec 25, 2024"

    def test_iso_week_starts_monday(self):
        sunday = datetime(2026, 3, 22, 18)
        assert start_of_iso_week(sunday) == datetime(2026, 3, 16)

    def test_add_months_clamps_day(self):
        assert add_months(datetime(2026, 1, 31), 1) == datetime(2026, 2, 28)
        assert add_months(datetime(2026, 1, 1), -11) == datetime(2025, 2, 1)

    def test_range_caption(self):
        caption = format_range_caption(datetime(2026, 3, 1), self.REF)
        assert caption == "Showing expenses from Mar 1, 2026 to Mar 18, 2026."

    def test_parse_time(self):
        assert parse_time("07:45") == (7, 45)
        assert parse_time("25:00") is None


class TestAppConfig:
    def test_missing_file_is_empty(self, tmp_path):
        assert load_config(tmp_path / "nope.json") == {}

    def test_corrupt_file_is_empty(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{oops", encoding="utf-8")
        assert load_config(path) == {}
        assert get_log_level(path) == "INFO"

    def test_db_folder(self, tmp_path):
        path = tmp_path / "config.json"
        assert get_db_folder(path) is None
        path.write_text(json.dumps({"db_folder": "/data/expenses"}), encoding="utf-8")
        assert get_db_folder(path) == "/data/expenses"

    def test_log_level_is_upper_cased(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"log_level": "debug"}), encoding="utf-8")
        assert get_log_level(path) == "DEBUG"
