"""Civic Intake - municipal complaint intake with priority scoring."""

__version__ = "0.1.0"
