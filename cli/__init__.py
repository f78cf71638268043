"""Command line entry points for fenwicktrace."""
