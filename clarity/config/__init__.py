"""Configuration: settings, vocabulary, weights, profiles and prompts."""
