"""Infrastructure layer: settings, AI providers, media encoding."""
