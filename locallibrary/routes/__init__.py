"""Blueprints for the catalog UI."""
