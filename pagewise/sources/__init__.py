"""Ready-made decoders and endpoints for known data sources."""
