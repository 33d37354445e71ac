"""FastAPI application for the user registry."""
