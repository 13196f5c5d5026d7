from credits.domain.models import BoostPurchase, CreditAccount, CreditTransaction

__all__ = ["BoostPurchase", "CreditAccount", "CreditTransaction"]
