"""Cross-cutting concerns: auth, authorization, database, errors and logging."""
