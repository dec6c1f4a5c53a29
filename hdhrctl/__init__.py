"""Control-plane client for HDHomeRun tuner appliances."""

__version__ = "0.1.0"
