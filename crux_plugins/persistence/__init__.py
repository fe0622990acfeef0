"""Persistence layer: optional durable storage for committed audit events."""
