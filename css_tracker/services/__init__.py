"""Moduł: services - konfiguracja, skanowanie plików, przebieg analizy i raporty."""

from css_tracker.services.tracker import TrackerReport, run_tracker

__all__ = ["TrackerReport", "run_tracker"]
