# streamshelf/services/__init__.py
from streamshelf.services.auth import AuthService
from streamshelf.services.catalog import CatalogService
from streamshelf.services.favorites import FavoritesService
from streamshelf.services.profiles import ProfileService
from streamshelf.services.ratings import RatingService
from streamshelf.services.social import SocialService

__all__ = [
    "AuthService",
    "CatalogService",
    "FavoritesService",
    "ProfileService",
    "RatingService",
    "SocialService",
]
