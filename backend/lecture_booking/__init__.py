"""Lecture booking backend: slot scheduling, recurring series and reports."""
