"""Host-side helpers: text and image export, Qt scheduling and clipboard."""
