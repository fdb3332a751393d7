"""WinMix football match prediction engine."""

__version__ = "1.0.0"
