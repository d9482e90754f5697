"""Tenancy application layer: resolver service and its cache."""
