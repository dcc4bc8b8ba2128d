"""Text sanitization for untrusted AI judgment fields."""

import re

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")
_BULLET_PREFIX = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


def sanitize_text(text: str | None, max_length: int = 2000) -> str | None:
    """
    Sanitize untrusted text fields.

    Removes control characters (newlines are kept so bullet text survives)
    and truncates to max_length.

    Args:
        text: Text to sanitize (may be None)
        max_length: Maximum length before truncation

    Returns:
        Sanitized text or None if input was None
    """
    if text is None:
        return None

    text = _CONTROL_CHARS.sub("", str(text))

    if len(text) > max_length:
        text = text[:max_length] + "..."

    return text.strip()


def sanitize_list(items: object, max_items: int = 20, max_length: int = 200) -> tuple[str, ...]:
    """Sanitize a list of short strings, dropping blanks and non-list input."""
    if not isinstance(items, (list, tuple)):
        return ()
    cleaned: list[str] = []
    for item in items[:max_items]:
        if item is None:
            continue
        text = sanitize_text(str(item).replace("\n", " "), max_length=max_length)
        if text:
            cleaned.append(text)
    return tuple(cleaned)


def split_bullets(text: object, max_items: int = 20) -> tuple[str, ...]:
    """Split a newline-separated bullet string into clean bullet items.

    A list is accepted too, since the judge sometimes ignores the
    single-string contract.
    """
    if isinstance(text, (list, tuple)):
        return sanitize_list(text, max_items=max_items)
    cleaned = sanitize_text(text if isinstance(text, str) else None)
    if not cleaned:
        return ()
    bullets = [_BULLET_PREFIX.sub("", line).strip() for line in cleaned.splitlines()]
    return tuple(b for b in bullets if b)[:max_items]
