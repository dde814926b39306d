"""
Reliability engineering computation core.

Weibull modelling, failure-data parameter estimation, maintenance interval
optimisation, RCM strategy selection and Monte Carlo cost simulation.
"""

__version__ = "1.0.0"
