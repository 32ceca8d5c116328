"""Application services orchestrating character use cases."""

from gamebook_companion.services.character_service import CharacterService

__all__ = ["CharacterService"]
