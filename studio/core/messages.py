"""Localized user-facing messages.

Flow errors and notices are stored on flow state as display-ready strings in
`UI_LANGUAGE`. Unknown languages and unknown keys fall back to English.
"""

from studio.llm.provider_config import UI_LANGUAGE

MESSAGES = {
    "en": {
        "generation_failed": "Image generation failed: {detail}",
        "understanding_failed": "Image analysis failed: {detail}",
        "no_image": "Please upload an image first.",
        "no_content": "No content was returned by the service.",
        "translation_failed": "Translation failed; the original text was used.",
        "overlay_failed": "Could not draw text on the image; showing the original image.",
        "empty_prompt": "Please enter a description first.",
    },
    "ar": {
        "generation_failed": "فشل توليد الصورة: {detail}",
        "understanding_failed": "فشل تحليل الصورة: {detail}",
        "no_image": "يرجى رفع صورة أولاً.",
        "no_content": "لم تُرجع الخدمة أي محتوى.",
        "translation_failed": "فشلت الترجمة؛ تم استخدام النص الأصلي.",
        "overlay_failed": "تعذر رسم النص على الصورة؛ يتم عرض الصورة الأصلية.",
        "empty_prompt": "يرجى إدخال وصف أولاً.",
    },
}


def message(key: str, language: str | None = None, **fmt) -> str:
    """Return the message for `key` in `language` (default `UI_LANGUAGE`)."""
    table = MESSAGES.get(language or UI_LANGUAGE) or MESSAGES["en"]
    template = table.get(key) or MESSAGES["en"].get(key, key)
    if fmt:
        return template.format(**fmt)
    return template
