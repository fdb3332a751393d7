"""
File Data Source

Loads historical matches from a CSV or JSON file into memory.

Accepted layouts:
- the native columns: date, home_team, away_team, home_score, away_score,
  season, competition
- Football-Data.co.uk CSV columns: Date, HomeTeam, AwayTeam, FTHG, FTAG, Div
- JSON: a list of match objects, or {"matches": [...]}
"""

import json
import logging
from pathlib import Path

import pandas as pd

from winmix.domain.entities.entities import MatchRecord
from winmix.domain.exceptions import DataSourceException
from winmix.infrastructure.data_sources.in_memory import InMemoryMatchSource


logger = logging.getLogger(__name__)


# Football-Data.co.uk column names -> native names
COLUMN_ALIASES = {
    "Date": "date",
    "HomeTeam": "home_team",
    "AwayTeam": "away_team",
    "FTHG": "home_score",
    "FTAG": "away_score",
    "Season": "season",
    "Div": "competition",
}

REQUIRED_COLUMNS = ["date", "home_team", "away_team"]


class FileMatchSource(InMemoryMatchSource):
    """Read-only data source over a CSV/JSON snapshot of matches."""

    def __init__(self, path: str):
        self.path = Path(path)
        df = self.read_file(self.path)
        matches = self.parse_matches(df)
        logger.info(f"Loaded {len(matches)} matches from {self.path}")
        super().__init__(matches)

    @staticmethod
    def read_file(path: Path) -> pd.DataFrame:
        """
        Read the raw match table.

        Raises:
            DataSourceException: If the file is missing or malformed
        """
        try:
            if path.suffix.lower() == ".json":
                with open(path, encoding="utf-8") as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    data = data.get("matches", [])
                return pd.DataFrame(data)
            return pd.read_csv(path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read matches file {path}: {e}")
            raise DataSourceException(f"Failed to read matches file {path}: {e}") from e

    @staticmethod
    def parse_matches(df: pd.DataFrame) -> list[MatchRecord]:
        """
        Parse DataFrame into MatchRecord entities.

        Rows with an unparseable date or inconsistent scores are skipped.

        Raises:
            DataSourceException: If a required column is missing
        """
        football_data_layout = "HomeTeam" in df.columns
        df = df.rename(columns=COLUMN_ALIASES)

        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise DataSourceException(
                f"Missing required columns {missing}. Available: {df.columns.tolist()}"
            )

        dates = pd.to_datetime(df["date"], dayfirst=football_data_layout, errors="coerce")

        matches = []
        skipped = 0

        for idx, row in df.iterrows():
            match_date = dates.loc[idx]
            if pd.isna(match_date):
                skipped += 1
                continue

            home_score = row.get("home_score")
            away_score = row.get("away_score")

            try:
                matches.append(
                    MatchRecord(
                        match_date=match_date.date(),
                        home_team=str(row["home_team"]).strip(),
                        away_team=str(row["away_team"]).strip(),
                        home_score=int(home_score) if pd.notna(home_score) else None,
                        away_score=int(away_score) if pd.notna(away_score) else None,
                        season=str(row["season"]) if pd.notna(row.get("season")) else "",
                        competition=str(row["competition"]) if pd.notna(row.get("competition")) else "",
                    )
                )
            except ValueError as e:
                logger.debug(f"Error parsing row {idx}: {e}")
                skipped += 1

        if skipped:
            logger.warning(f"Skipped {skipped} invalid match rows")

        return matches
