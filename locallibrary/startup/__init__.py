"""Application startup wiring."""
