"""Repository for Profile entity."""

from src.buildor.models import Profile
from src.buildor.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    model = Profile
