"""Domain services: scoring, enrichment and narrative."""
