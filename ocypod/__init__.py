"""Durations, timestamps, job fields, queue settings, errors, configuration and health reports for a Redis-backed job queue."""

__version__ = "0.1.0"