"""Mapping engine: profiles, path resolution, coercion and orchestration."""
