"""Ranked views over the user table and the score log.

Leaderboards are recomputed from the log on each read. Window boundaries
depend only on the injected clock and reference timezone.
"""
