"""Robotics value types: time, timeouts, temperature, twists, wrenches, waypoints, commands and transforms and twists with covariance."""

__version__ = "1.0.0"