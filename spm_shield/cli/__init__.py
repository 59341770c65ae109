"""Command-line interface for SPMShield."""
