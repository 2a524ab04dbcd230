# streamshelf/repositories/__init__.py
from streamshelf.repositories.catalog import CatalogRepository
from streamshelf.repositories.favorites import FavoriteRepository
from streamshelf.repositories.profiles import ParentalSettingsRepository, ProfileRepository
from streamshelf.repositories.ratings import RatingRepository
from streamshelf.repositories.social import FollowRepository, ListRepository, ShareRepository
from streamshelf.repositories.users import UserRepository

__all__ = [
    "CatalogRepository",
    "FavoriteRepository",
    "FollowRepository",
    "ListRepository",
    "ParentalSettingsRepository",
    "ProfileRepository",
    "RatingRepository",
    "ShareRepository",
    "UserRepository",
]
