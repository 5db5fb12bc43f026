"""
Rules core for a tabletop role-playing system.

Determines what an item can do, which resources its use consumes, how its
formulas scale and how its rolls are composed, then drives a single use of
the item through a small state machine.
"""

__version__ = "0.1.0"
