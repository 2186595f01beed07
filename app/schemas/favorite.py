from .base import CamelModel


class FavoriteCreate(CamelModel):
    user_id: int
