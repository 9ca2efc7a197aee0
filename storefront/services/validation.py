"""Checkout form validation"""

import re
from typing import Sequence

from ..core.errors import CheckoutValidationError
from ..models.checkout import CheckoutForm

# Latin letters, Latin-1 accented letters and plain spaces
NAME_PATTERN = re.compile(r"[A-Za-zÀ-ÖØ-öø-ÿ ]*")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def accepts_name_input(value: str) -> bool:
    """Whether a name field may take ``value`` as typed"""
    return bool(NAME_PATTERN.fullmatch(value))


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.fullmatch(email))


def is_form_complete(form: CheckoutForm) -> bool:
    return all(
        value.strip()
        for value in (form.first_name, form.last_name, form.email)
    )


def validate_checkout(form: CheckoutForm, lines: Sequence) -> None:
    """
    Check the form and cart before submission.

    Raises:
        CheckoutValidationError: for the first rule that fails
    """
    if not is_form_complete(form):
        missing = next(
            name for name in ("first_name", "last_name", "email")
            if not getattr(form, name).strip()
        )
        raise CheckoutValidationError(missing, "Please fill in all fields")

    if not accepts_name_input(form.first_name):
        raise CheckoutValidationError("first_name", "First name may only contain letters")
    if not accepts_name_input(form.last_name):
        raise CheckoutValidationError("last_name", "Last name may only contain letters")

    if not is_valid_email(form.email):
        raise CheckoutValidationError("email", "Please enter a valid email")

    if not lines:
        raise CheckoutValidationError("cart", "Your cart is empty")


def is_submittable(form: CheckoutForm, lines: Sequence) -> bool:
    """Non-raising form of validate_checkout"""
    try:
        validate_checkout(form, lines)
    except CheckoutValidationError:
        return False
    return True
