"""
Command line prediction tool.

Usage:
    winmix-predict HOME AWAY [--algorithm ID] [--season S] [--data FILE] [--json]
    winmix-predict --list-algorithms
"""
import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from winmix.config import MATCHES_FILE
from winmix.domain.exceptions import DataSourceException, PredictionException
from winmix.domain.repositories.repositories import MatchDataSource
from winmix.domain.services.prediction_service import PredictionService
from winmix.application.dtos.dtos import PredictionResponseDTO
from winmix.application.use_cases.use_cases import GetAlgorithmsUseCase, GetPredictionUseCase
from winmix.utils.log_config import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DATA_SOURCE = 1
EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="winmix-predict",
        description="Predict a football fixture from historical results",
    )
    parser.add_argument("home", nargs="?", help="Home team key")
    parser.add_argument("away", nargs="?", help="Away team key")
    parser.add_argument("-a", "--algorithm", default="default", help="Algorithm identifier (default: %(default)s)")
    parser.add_argument("-s", "--season", default=None, help="Restrict statistics to a season")
    parser.add_argument("-d", "--data", default=None, help="CSV/JSON matches file (defaults to MATCHES_FILE or the database)")
    parser.add_argument("--json", action="store_true", help="Print the prediction as JSON")
    parser.add_argument("--list-algorithms", action="store_true", help="List available algorithms and exit")
    return parser


def open_data_source(path: Optional[str]) -> MatchDataSource:
    """Open the matches file when one is given, else the database."""
    from winmix.infrastructure.data_sources.file_source import FileMatchSource
    from winmix.infrastructure.repositories.sql_match_repository import SqlMatchRepository

    path = path or MATCHES_FILE
    if path:
        return FileMatchSource(path)
    return SqlMatchRepository()


def format_prediction(response: PredictionResponseDTO) -> str:
    p = response.prediction
    meta = response.meta
    season = f" [{meta.season}]" if meta.season else ""
    lines = [
        f"{meta.home_team} vs {meta.away_team}{season} - {p.algorithm}",
        f"  1 / X / 2:        {p.homeWinProbability:.1f}% / {p.drawProbability:.1f}% / {p.awayWinProbability:.1f}%",
        f"  Expected goals:   {p.expectedGoals.home:.2f} - {p.expectedGoals.away:.2f}",
        f"  Both teams score: {p.bothTeamsScore:.1f}%",
        f"  Over 1.5/2.5/3.5: {p.totalGoals.over15:.1f}% / {p.totalGoals.over25:.1f}% / {p.totalGoals.over35:.1f}%",
        f"  Confidence:       {p.confidence:.2f}",
    ]
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(sys.stderr)

    if args.list_algorithms:
        for algorithm in GetAlgorithmsUseCase().execute().algorithms:
            print(f"{algorithm.id:<18} {algorithm.name:<28} {algorithm.speed:<8} {algorithm.description}")
        return EXIT_OK

    try:
        data_source = open_data_source(args.data)
        use_case = GetPredictionUseCase(PredictionService(data_source))
        response = use_case.execute(args.home, args.away, args.algorithm, args.season)
    except DataSourceException as e:
        logger.error(f"Match data unavailable: {e}")
        return EXIT_DATA_SOURCE
    except PredictionException as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    if args.json:
        print(json.dumps(response.model_dump(mode="json", exclude_none=True), indent=2))
    else:
        print(format_prediction(response))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
