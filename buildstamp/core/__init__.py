"""Core metadata collection for buildstamp."""
