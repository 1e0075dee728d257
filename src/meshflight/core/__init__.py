"""Core services shared by the whole package (logging, resource paths)."""
