"""Command line interface for sheetgraph."""
