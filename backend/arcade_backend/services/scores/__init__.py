"""Append-only score log and the per-user running totals it feeds."""
