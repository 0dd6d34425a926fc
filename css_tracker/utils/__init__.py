"""Moduł: utils - funkcje pomocnicze (ścieżki, logowanie)."""
