"""Category CRUD HTTP API."""
