"""
css-tracker - statyczna analiza powiązań klas CSS w projekcie front-end.

Pakiet łączy definicje klas z arkuszy stylów z ich użyciami w plikach
znaczników/skryptów i raportuje nieużywane definicje, brakujące definicje,
duplikaty, wyrażenia dynamiczne oraz sugestie przeniesienia klas.
"""

__version__ = "1.2.0"
