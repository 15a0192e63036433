"""User-facing labels for the match board."""

from __future__ import annotations

WINDOW_TITLE = "توصيل الحروف"

MODE_CONNECT = "وضع الربط"
MODE_DELETE = "وضع الحذف"

BUTTON_NEW = "جديد"
BUTTON_CLEAR = "مسح"
BUTTON_REVEAL = "إظهار"
BUTTON_HIDE = "إخفاء"
BUTTON_DELETE = "حذف خط"
BUTTON_STOP_DELETE = "إيقاف"
BUTTON_HELP = "تعليمات"

INSTRUCTIONS_TITLE = "طريقة اللعب"
INSTRUCTIONS_HTML = (
    "<ul>"
    "<li>اسحب من حرف في العمود الأول إلى الحرف المطابق في العمود الثاني.</li>"
    "<li>يمكنك أيضاً لمس الحرف الأول ثم لمس الحرف المطابق.</li>"
    "<li>اضغط «حذف خط» ثم اضغط على الخط لحذفه.</li>"
    "<li>اضغط «إظهار» لرؤية الإجابات الصحيحة.</li>"
    "</ul>"
)


def mode_label(delete_active: bool) -> str:
    return MODE_DELETE if delete_active else MODE_CONNECT


def reveal_button_label(revealed: bool) -> str:
    return BUTTON_HIDE if revealed else BUTTON_REVEAL


def delete_button_label(delete_active: bool) -> str:
    return BUTTON_STOP_DELETE if delete_active else BUTTON_DELETE
