"""Value types and API payload models."""
