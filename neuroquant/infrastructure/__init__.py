"""Infrastructure: indicators, market data and AI signal collaborators."""
