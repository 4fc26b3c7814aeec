"""Cognitive Insights: strengths, weaknesses, and narrative summaries from assessment history."""

__version__ = "0.1.0"
