"""
Domain exceptions for the prediction system.
"""

class PredictionException(Exception):
    """Base exception for prediction-related errors."""
    pass

class UnknownAlgorithmException(PredictionException, ValueError):
    """Raised when a prediction is requested with an algorithm identifier that does not exist."""

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"Unknown algorithm: {algorithm}")

class InvalidFixtureException(PredictionException, ValueError):
    """Raised when the home/away team pair of a fixture is missing or identical."""
    pass

class DataSourceException(PredictionException):
    """Raised when historical match data cannot be read from the data source."""
    pass

class TeamNotFoundException(PredictionException):
    """Raised when a team key does not appear in the match history."""

    def __init__(self, team: str):
        self.team = team
        super().__init__(f"Team not found: {team}")
