"""HTTP request/response schemas (camelCase on the wire)."""
