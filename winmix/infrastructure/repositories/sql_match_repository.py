import logging
from typing import Iterable, Optional

from sqlalchemy import Column, Date, Integer, String, case, func, or_, and_, select, union_all
from sqlalchemy.exc import SQLAlchemyError

from winmix.domain.entities.entities import MatchRecord, TeamAggregateStats, TeamScoringAverage
from winmix.domain.exceptions import DataSourceException
from winmix.domain.repositories.repositories import MatchDataSource
from winmix.infrastructure.database.database_service import Base, DatabaseService, get_database_service

logger = logging.getLogger(__name__)

class MatchModel(Base):
    """
    SQLAlchemy model for historical matches.
    """
    __tablename__ = "matches"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, index=True)
    home_team = Column(String, nullable=False, index=True)
    away_team = Column(String, nullable=False, index=True)
    home_score = Column(Integer, nullable=True)  # NULL until played
    away_score = Column(Integer, nullable=True)
    season = Column(String, nullable=False, default="", index=True)
    competition = Column(String, nullable=False, default="")

    @classmethod
    def from_record(cls, match: MatchRecord) -> "MatchModel":
        return cls(
            date=match.match_date,
            home_team=match.home_team,
            away_team=match.away_team,
            home_score=match.home_score,
            away_score=match.away_score,
            season=match.season,
            competition=match.competition,
        )

    def to_record(self) -> MatchRecord:
        return MatchRecord(
            id=self.id,
            match_date=self.date,
            home_team=self.home_team,
            away_team=self.away_team,
            home_score=self.home_score,
            away_score=self.away_score,
            season=self.season or "",
            competition=self.competition or "",
        )

class SqlMatchRepository(MatchDataSource):
    """
    Match data source backed by the ``matches`` table.

    Predictions only read; ``add_matches`` exists for loaders and fixtures.
    """

    def __init__(self, db_service: DatabaseService = None):
        self.db_service = db_service or get_database_service()

    def create_tables(self):
        self.db_service.create_tables()

    def add_matches(self, matches: Iterable[MatchRecord]) -> int:
        """Insert match records; returns how many rows were written."""
        rows = [MatchModel.from_record(match) for match in matches]
        try:
            with self.db_service.session_scope() as session:
                session.add_all(rows)
        except SQLAlchemyError as e:
            logger.error(f"Failed to store {len(rows)} matches: {e}")
            raise DataSourceException(f"Failed to store matches: {e}") from e

        logger.info(f"Stored {len(rows)} matches")
        return len(rows)

    def _recent_first(self, query):
        return query.order_by(MatchModel.date.desc(), MatchModel.id.desc())

    @staticmethod
    def _filter(query, season: Optional[str], team: Optional[str]):
        if season:
            query = query.filter(MatchModel.season == season)
        if team:
            query = query.filter(or_(MatchModel.home_team == team, MatchModel.away_team == team))
        return query

    def get_head_to_head(self, team1: str, team2: str, limit: int = 20) -> list[MatchRecord]:
        fixture = or_(
            and_(MatchModel.home_team == team1, MatchModel.away_team == team2),
            and_(MatchModel.home_team == team2, MatchModel.away_team == team1),
        )
        try:
            with self.db_service.session_scope() as session:
                rows = self._recent_first(session.query(MatchModel).filter(fixture)).limit(limit).all()
                return [row.to_record() for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch head-to-head {team1} vs {team2}: {e}")
            raise DataSourceException(f"Failed to fetch head-to-head matches: {e}") from e

    def get_team_matches(self, team: str, limit: int = 10, season: Optional[str] = None) -> list[MatchRecord]:
        try:
            with self.db_service.session_scope() as session:
                query = session.query(MatchModel).filter(
                    or_(MatchModel.home_team == team, MatchModel.away_team == team)
                )
                if season:
                    query = query.filter(MatchModel.season == season)

                rows = self._recent_first(query).limit(limit).all()
                return [row.to_record() for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch recent matches for {team}: {e}")
            raise DataSourceException(f"Failed to fetch team recent matches: {e}") from e

    def get_team_statistics(self, team: str, season: Optional[str] = None) -> TeamAggregateStats:
        """Aggregate a team's scored matches in a single SQL query."""
        is_home = MatchModel.home_team == team
        goals_for = case((is_home, MatchModel.home_score), else_=MatchModel.away_score)
        goals_against = case((is_home, MatchModel.away_score), else_=MatchModel.home_score)

        try:
            with self.db_service.session_scope() as session:
                query = session.query(
                    func.count(MatchModel.id),
                    func.sum(case((goals_for > goals_against, 1), else_=0)),
                    func.sum(case((MatchModel.home_score == MatchModel.away_score, 1), else_=0)),
                    func.avg(goals_for),
                    func.avg(goals_against),
                ).filter(
                    or_(MatchModel.home_team == team, MatchModel.away_team == team),
                    MatchModel.home_score.isnot(None),
                    MatchModel.away_score.isnot(None),
                )
                if season:
                    query = query.filter(MatchModel.season == season)

                total, wins, draws, avg_for, avg_against = query.one()
        except SQLAlchemyError as e:
            logger.error(f"Failed to calculate team stats for {team}: {e}")
            raise DataSourceException(f"Failed to calculate team stats: {e}") from e

        total = int(total or 0)
        if total == 0:
            return TeamAggregateStats(team=team)

        wins = int(wins or 0)
        draws = int(draws or 0)
        avg_for = float(avg_for or 0.0)
        avg_against = float(avg_against or 0.0)

        return TeamAggregateStats(
            team=team,
            total_matches=total,
            wins=wins,
            draws=draws,
            losses=total - wins - draws,
            win_rate=round(wins / total, 4),
            avg_goals_for=round(avg_for, 2),
            avg_goals_against=round(avg_against, 2),
            goal_difference=round(avg_for - avg_against, 2),
        )

    def get_teams(self) -> list[str]:
        try:
            with self.db_service.session_scope() as session:
                rows = session.query(MatchModel.home_team).union(session.query(MatchModel.away_team)).all()
                return sorted(row[0] for row in rows)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list teams: {e}")
            raise DataSourceException(f"Failed to list teams: {e}") from e

    def get_seasons(self) -> list[str]:
        try:
            with self.db_service.session_scope() as session:
                rows = session.query(MatchModel.season).distinct().order_by(MatchModel.season.desc()).all()
                return [row[0] for row in rows if row[0]]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list seasons: {e}")
            raise DataSourceException(f"Failed to get seasons: {e}") from e

    def get_matches(
        self,
        limit: int = 100,
        offset: int = 0,
        season: Optional[str] = None,
        team: Optional[str] = None,
        played_only: bool = False,
    ) -> list[MatchRecord]:
        try:
            with self.db_service.session_scope() as session:
                query = self._filter(session.query(MatchModel), season, team)
                if played_only:
                    query = query.filter(MatchModel.home_score.isnot(None), MatchModel.away_score.isnot(None))

                rows = self._recent_first(query).offset(offset).limit(limit).all()
                return [row.to_record() for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list matches (season={season}, team={team}): {e}")
            raise DataSourceException(f"Failed to fetch matches: {e}") from e

    def count_matches(self, season: Optional[str] = None, team: Optional[str] = None) -> int:
        try:
            with self.db_service.session_scope() as session:
                query = self._filter(session.query(func.count(MatchModel.id)), season, team)
                return int(query.scalar() or 0)
        except SQLAlchemyError as e:
            logger.error(f"Failed to count matches: {e}")
            raise DataSourceException(f"Failed to get total count: {e}") from e

    def get_top_scorers(self, limit: int = 5) -> list[TeamScoringAverage]:
        """Average of each team's home and away scoring averages, in one query."""
        home = (
            select(MatchModel.home_team.label("team"), func.avg(MatchModel.home_score).label("goals_for"))
            .where(MatchModel.home_score.isnot(None), MatchModel.away_score.isnot(None))
            .group_by(MatchModel.home_team)
        )
        away = (
            select(MatchModel.away_team.label("team"), func.avg(MatchModel.away_score).label("goals_for"))
            .where(MatchModel.home_score.isnot(None), MatchModel.away_score.isnot(None))
            .group_by(MatchModel.away_team)
        )
        sides = union_all(home, away).subquery()
        avg_goals = func.avg(sides.c.goals_for)
        ranking = (
            select(sides.c.team, avg_goals)
            .group_by(sides.c.team)
            .order_by(avg_goals.desc(), sides.c.team)
            .limit(limit)
        )

        try:
            with self.db_service.session_scope() as session:
                rows = session.execute(ranking).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to rank top scorers: {e}")
            raise DataSourceException(f"Failed to get top scorers: {e}") from e

        return [TeamScoringAverage(team=team, avg_goals=round(float(avg), 2)) for team, avg in rows]
