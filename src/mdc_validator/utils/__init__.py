"""Utility helpers for reporting."""

from .reporting import ValidationReporter

__all__ = ["ValidationReporter"]
