"""Command line interface for wakasource."""
