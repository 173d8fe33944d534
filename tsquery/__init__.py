"""Instant rate / instant delta temporal functions for time-series queries."""
