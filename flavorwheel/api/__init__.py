"""HTTP API for the flavor wheel service."""
