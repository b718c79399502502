"""Command line interface for the thermometer chart."""
