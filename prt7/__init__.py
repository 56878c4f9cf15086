"""
PRT-7 decoder package.

This package provides:
- A rotating substitution rotor and the decoded message accumulator
- Parsing of PRT-7 text lines into Load/Map frames
- A session loop driving frames from a serial (or replayed) line source
- Configuration management for the serial connection
"""

__version__ = "0.1.0"
