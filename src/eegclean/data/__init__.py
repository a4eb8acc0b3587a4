"""Fixture builders: synthetic signals, artefact injection and epoch slicing."""
