"""Moduł: core - ekstrakcja wystąpień klas i analiza powiązań."""
