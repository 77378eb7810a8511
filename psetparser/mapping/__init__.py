"""Conversion of the documentation markup to psetparser data."""
