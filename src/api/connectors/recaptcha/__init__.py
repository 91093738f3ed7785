"""Conector Google reCAPTCHA."""

from api.connectors.recaptcha.client import RecaptchaClient, RecaptchaVerificationError

__all__ = ["RecaptchaClient", "RecaptchaVerificationError"]
