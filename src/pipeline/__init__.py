"""Staging promotion check wired from CLI settings to the printed report."""

from .runner import main, run

__all__ = ["main", "run"]
