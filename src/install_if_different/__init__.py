"""Decide whether an update object must be installed or already matches its target."""
