"""
Electronic Check System

Issues signed electronic representations of paper checks and verifies them
with a 4-digit security PIN and a SHA-256 content hash.
"""

__version__ = "1.0.0"
