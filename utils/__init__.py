# Shared helpers for the Zade backend apps
