"""User-facing response messages, keyed by locale."""

from typing import Dict, Optional
from marketplace.core.config import settings

DEFAULT_LOCALE = "en"

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "product_not_found": "Product not found",
        "product_deleted": "Product deleted successfully",
        "no_search_results": "No matching results",
        "user_not_found": "User not found",
        "user_deleted": "User deleted successfully",
        "no_image_file": "No image file provided",
        "profile_image_updated": "Profile image updated",
        "server_error": "Server error",
        "invalid_request": "Invalid request",
        "internal_error": "Internal server error",
    },
    "ar": {
        "product_not_found": "المنتج غير موجود",
        "product_deleted": "تم حذف المنتج بنجاح",
        "no_search_results": "لا توجد نتائج مطابقة",
        "user_not_found": "المستخدم غير موجود",
        "user_deleted": "تم حذف المستخدم بنجاح",
        "no_image_file": "لم يتم إرفاق ملف صورة",
        "profile_image_updated": "تم تحديث صورة الملف الشخصي",
        "server_error": "حدث خطأ في السيرفر",
    },
}


def get_message(key: str, locale: Optional[str] = None) -> str:
    """Look up a message, falling back to English for unknown locales or keys."""
    catalog = MESSAGES.get(locale or settings.message_locale, {})
    return catalog.get(key) or MESSAGES[DEFAULT_LOCALE].get(key, key)
