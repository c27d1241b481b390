from shelfpicker.api.collection import router as collection_router
from shelfpicker.api.games import router as games_router
from shelfpicker.api.health import router as health_router
from shelfpicker.api.users import router as users_router

__all__ = [
    "collection_router",
    "games_router",
    "health_router",
    "users_router",
]
