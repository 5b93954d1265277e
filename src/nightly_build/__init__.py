"""
nightly-build: a personal task tracker with heartbeat check-ins,
next-task recommendation, anti-slacking detection and a morning report.
"""

__version__ = "0.1.0"
