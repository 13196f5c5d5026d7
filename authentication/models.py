from authentication.domain.models.user import CustomUser

__all__ = ["CustomUser"]
