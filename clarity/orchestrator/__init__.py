"""Snapshot pipeline orchestration."""
