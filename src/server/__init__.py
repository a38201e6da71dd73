"""HTTP server for docsite."""
