"""Roadbook: multi-tenant Travel Compositor booking resolver."""
