from typing import Any

from app.enums.user_role import Language


def localized(obj: Any, field: str, lang: Language = Language.EN) -> str:
    """
    Picks the bilingual variant of a field, e.g. field="name" reads
    name_en or name_ar. Falls back to English when the Arabic value is empty.
    """
    suffix = "ar" if lang == Language.AR else "en"
    key = f"{field}_{suffix}"
    fallback = f"{field}_en"

    if isinstance(obj, dict):
        return obj.get(key) or obj.get(fallback) or ""
    return getattr(obj, key, None) or getattr(obj, fallback, None) or ""
