"""Per-entity repository modules for the catalog store."""
