"""Layout configuration model and loaders."""
