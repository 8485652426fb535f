"""Command line entry points for svcauth."""
