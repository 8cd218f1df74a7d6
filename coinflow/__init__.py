"""Trade-signal processing, strategy gating and polynomial trend forecasting."""

__version__ = "0.1.0"