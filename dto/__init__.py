"""Pydantic models for run configuration and the extraction summary."""
