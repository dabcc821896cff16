from .models import RestaurantSettings

__all__ = ["RestaurantSettings"]
