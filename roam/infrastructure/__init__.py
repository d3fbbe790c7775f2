"""Infrastructure: implementations of application ports (preferences, providers)."""
