"""Clarity Snapshot classification and enrichment service."""
