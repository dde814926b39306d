"""
Core algorithms package for reliability engineering.

This package provides:
- Special functions (gamma)
- Weibull distribution model
- Parameter estimation from failure history
- Maintenance interval optimisation
- RCM strategy selection
- Monte Carlo cost simulation
"""

from . import special
from . import weibull
from . import estimation
from . import optimization
from . import rcm
from . import simulation

__all__ = [
    'special',
    'weibull',
    'estimation',
    'optimization',
    'rcm',
    'simulation',
]
