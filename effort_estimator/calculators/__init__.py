"""
Deterministic calculation engine.

Pure Python math, no I/O. Given an ordered snapshot of estimation lines,
produce the derived Support sizing, every line's final estimate, and the
estimation totals.
"""
