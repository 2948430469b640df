"""HTTP surface for the timeline engine (FastAPI)."""
