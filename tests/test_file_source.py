"""
Unit Tests for the File Data Source

Tests CSV/JSON loading in the native and Football-Data.co.uk layouts.
"""

import json
from datetime import date

import pytest

from winmix.domain.exceptions import DataSourceException
from winmix.infrastructure.data_sources.file_source import FileMatchSource


NATIVE_CSV = """date,home_team,away_team,home_score,away_score,season,competition
2024-08-10,Ferencvaros,Ujpest,3,0,2024/25,NB I
2024-09-14,Ujpest,Ferencvaros,1,1,2024/25,NB I
2024-10-19,Ferencvaros,Honved,,,2024/25,NB I
not-a-date,Ferencvaros,Ujpest,1,0,2024/25,NB I
"""

FOOTBALL_DATA_CSV = """Div,Date,HomeTeam,AwayTeam,FTHG,FTAG,FTR
E0,16/08/2024,Man United,Fulham,1,0,H
E0,17/08/2024,Ipswich,Liverpool,0,2,A
E0,17/08/2024,Arsenal,Wolves,2,0,H
"""


class TestFileMatchSource:
    """Tests for FileMatchSource."""

    def test_native_csv(self, tmp_path):
        path = tmp_path / "matches.csv"
        path.write_text(NATIVE_CSV)

        source = FileMatchSource(str(path))

        # the row with an invalid date is skipped
        assert len(source) == 3
        latest = source.get_team_matches("Ferencvaros", limit=1)[0]
        assert latest.match_date == date(2024, 10, 19)
        assert not latest.is_played
        assert source.get_team_statistics("Ferencvaros").total_matches == 2
        assert source.get_seasons() == ["2024/25"]

    def test_football_data_layout(self, tmp_path):
        path = tmp_path / "E0.csv"
        path.write_text(FOOTBALL_DATA_CSV)

        source = FileMatchSource(str(path))

        assert len(source) == 3
        match = source.get_team_matches("Fulham")[0]
        assert match.match_date == date(2024, 8, 16)
        assert (match.home_score, match.away_score) == (1, 0)
        assert match.competition == "E0"
        assert "Liverpool" in source.get_teams()

    def test_json_list(self, tmp_path):
        path = tmp_path / "matches.json"
        path.write_text(json.dumps([
            {"date": "2024-08-10", "home_team": "A", "away_team": "B", "home_score": 2, "away_score": 1, "season": "2024/25"},
            {"date": "2024-08-17", "home_team": "B", "away_team": "A", "home_score": 0, "away_score": 0, "season": "2024/25"},
        ]))

        source = FileMatchSource(str(path))

        assert len(source) == 2
        assert source.get_head_to_head("A", "B")[0].match_date == date(2024, 8, 17)

    def test_json_object_with_matches_key(self, tmp_path):
        path = tmp_path / "matches.json"
        path.write_text(json.dumps({
            "matches": [
                {"date": "2024-08-10", "home_team": "A", "away_team": "B", "home_score": 2, "away_score": 1},
            ]
        }))

        source = FileMatchSource(str(path))

        assert len(source) == 1
        assert source.get_team_statistics("A").wins == 1

    def test_inconsistent_scores_skipped(self, tmp_path):
        path = tmp_path / "matches.csv"
        path.write_text(
            "date,home_team,away_team,home_score,away_score\n"
            "2024-08-10,A,B,2,\n"
            "2024-08-11,A,B,2,1\n"
        )

        assert len(FileMatchSource(str(path))) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataSourceException):
            FileMatchSource(str(tmp_path / "missing.csv"))

    def test_missing_required_column(self, tmp_path):
        path = tmp_path / "matches.csv"
        path.write_text("date,home_team\n2024-08-10,A\n")

        with pytest.raises(DataSourceException, match="away_team"):
            FileMatchSource(str(path))
