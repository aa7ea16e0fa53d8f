"""
Unit tests for the taskgen.schema package.

Run with: python -m unittest discover -s taskgen -t .
"""
