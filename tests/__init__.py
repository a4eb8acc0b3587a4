"""
Test suite for the eegclean artefact-removal pipeline.

Unit tests cover each pipeline stage; integration tests run the full pipeline
on synthetic fixtures with injected artefacts.
"""
