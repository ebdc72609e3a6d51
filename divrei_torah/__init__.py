"""Divrei Torah library: corpus build and search core."""
