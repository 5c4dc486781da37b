"""Client for the iTunes top podcasts feed."""
