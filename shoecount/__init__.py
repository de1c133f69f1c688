"""
shoecount: a live card-counting and decision aid for Baccarat.

The package turns a stream of single-rank card inputs into hand state,
round outcomes, shoe statistics and an undo-capable history.
"""

__version__ = "0.1.0"
