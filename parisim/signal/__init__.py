"""Signal-level estimators."""
from .uqde import quarter_period_lag, uqde

__all__ = ['quarter_period_lag', 'uqde']
