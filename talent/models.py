from talent.domain.models import ArtisteProfile, FreelanceHire, FreelancerProfile

__all__ = ["ArtisteProfile", "FreelanceHire", "FreelancerProfile"]
