"""Use cases de checkout."""

from app.use_cases.checkout.create_checkout import CheckoutUseCase

__all__ = ["CheckoutUseCase"]
