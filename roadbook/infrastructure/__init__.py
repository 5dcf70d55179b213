"""Infrastructure layer: Travel Compositor client, caches and upstream exceptions."""
