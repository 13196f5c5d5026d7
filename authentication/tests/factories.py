import uuid
from datetime import timedelta
from decimal import Decimal

import factory
import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from django.utils import timezone

User = get_user_model()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    id = factory.LazyFunction(uuid.uuid4)
    username = factory.Sequence(lambda n: f"user_{n}@example.com")
    email = factory.LazyAttribute(lambda o: o.username)
    full_name = factory.Faker("name")
    password = factory.PostGenerationMethodCall("set_unusable_password")
    city = "Toronto"
    user_type = "buyer"
    is_active = True


class SellerFactory(UserFactory):
    username = factory.Sequence(lambda n: f"seller_{n}@example.com")
    user_type = "seller"
    is_verified = True


class EmployerFactory(UserFactory):
    username = factory.Sequence(lambda n: f"employer_{n}@example.com")
    user_type = "employer"


class FreelancerUserFactory(UserFactory):
    username = factory.Sequence(lambda n: f"freelancer_{n}@example.com")
    user_type = "freelancer"


class AdminFactory(UserFactory):
    username = factory.Sequence(lambda n: f"admin_{n}@example.com")
    user_type = "admin"
    is_admin = True
    is_staff = True


class LocatedUserFactory(UserFactory):
    latitude = Decimal("43.653200")
    longitude = Decimal("-79.383200")


def make_access_token(sub, email="someone@example.com", full_name="", expires_in=3600, secret=None, **overrides):
    """Mint a token the way the hosted auth provider does."""
    now = timezone.now()
    claims = {
        "sub": str(sub),
        "email": email,
        "aud": settings.SUPABASE_JWT_AUDIENCE,
        "role": "authenticated",
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
        "user_metadata": {"full_name": full_name},
    }
    claims.update(overrides)
    return jwt.encode(claims, secret or settings.SUPABASE_JWT_SECRET, algorithm="HS256")
