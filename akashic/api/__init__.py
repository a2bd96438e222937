"""HTTP API: schemas, routes and middleware."""
