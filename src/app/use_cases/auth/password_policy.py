"""
Password Complexity Policy

Checked locally before any password reaches the store:
- 8 to 12 characters
- letters and digits only
- at least one uppercase letter, one lowercase letter and one digit
"""

import re
from typing import List, Optional

from src.core.result import Error

MIN_LENGTH = 8
MAX_LENGTH = 12


def password_errors(password: str) -> List[str]:
    if not password:
        return ["Password is required."]

    errors = []
    if len(password) < MIN_LENGTH or len(password) > MAX_LENGTH:
        errors.append(f"Password must be between {MIN_LENGTH} and {MAX_LENGTH} characters.")
    if not re.fullmatch(r"[A-Za-z0-9]+", password):
        errors.append("Password may only contain letters and digits.")
    if not re.search(r"[A-Z]", password):
        errors.append("Password must include at least one uppercase letter.")
    if not re.search(r"[a-z]", password):
        errors.append("Password must include at least one lowercase letter.")
    if not re.search(r"[0-9]", password):
        errors.append("Password must include at least one digit.")
    return errors


def check_new_password(password: str, confirmation: str) -> Optional[Error]:
    """INVALID_PASSWORD error for a weak or unconfirmed password, None if acceptable"""
    errors = password_errors(password)
    if errors:
        return Error("INVALID_PASSWORD", " ".join(errors))
    if password != confirmation:
        return Error("INVALID_PASSWORD", "Password confirmation does not match.")
    return None
