"""
Утилиты для валидации регистрационных данных пользователя.
"""
import re
from typing import List, Optional


USERNAME_PATTERN = r'^[a-zA-Z0-9_]+$'
EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'


def validate_username(username: Optional[str]) -> Optional[str]:
    username = (username or "").strip()
    if not username:
        return "Username is required."
    if len(username) < 3:
        return "Username must be at least 3 characters long."
    if len(username) > 50:
        return "Username is too long (max 50 characters)."
    if not re.match(USERNAME_PATTERN, username):
        return "Username can only contain letters, numbers, and underscores."
    return None


def validate_email(email: Optional[str]) -> Optional[str]:
    email = (email or "").strip()
    if not email:
        return "Email is required."
    if not re.match(EMAIL_PATTERN, email):
        return "Please enter a valid email address."
    if len(email) > 100:
        return "Email is too long (max 100 characters)."
    return None


def validate_password(password: Optional[str], confirm_password: Optional[str]) -> List[str]:
    """
    Проверить пароль и его подтверждение.

    Пароль: 6-255 символов, минимум одна строчная, одна заглавная буква и одна цифра.
    """
    errors: List[str] = []
    password = password or ""

    if not password:
        errors.append("Password is required.")
    elif len(password) < 6:
        errors.append("Password must be at least 6 characters long.")
    elif len(password) > 255:
        errors.append("Password is too long (max 255 characters).")

    if password:
        has_lower = re.search(r'[a-z]', password)
        has_upper = re.search(r'[A-Z]', password)
        has_digit = re.search(r'[0-9]', password)
        if not (has_lower and has_upper and has_digit):
            errors.append(
                "Password must contain at least one lowercase letter, "
                "one uppercase letter, and one number."
            )

    if not confirm_password:
        errors.append("Please confirm your password.")
    elif password != confirm_password:
        errors.append("Passwords do not match.")

    return errors


def validate_registration(
    username: Optional[str],
    email: Optional[str],
    password: Optional[str],
    confirm_password: Optional[str],
) -> List[str]:
    """Собрать все ошибки регистрационной формы."""
    errors: List[str] = []
    for error in (validate_username(username), validate_email(email)):
        if error:
            errors.append(error)
    errors.extend(validate_password(password, confirm_password))
    return errors
