"""Command-line interface for buildstamp."""
