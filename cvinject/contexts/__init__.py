"""Bounded contexts: intake, targeting, templating, rendering."""
