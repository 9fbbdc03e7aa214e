"""Command line interface for Material Notes."""
