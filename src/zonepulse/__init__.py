"""zonepulse: market-data layer resolution and composite zone scoring."""

__version__ = "0.4.0"
