"""Service layer. Business logic and commits live here, never in blueprints."""
