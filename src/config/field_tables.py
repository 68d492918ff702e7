from __future__ import annotations

from src.models.config_models import FieldSpec, FieldType, RecordKind, RecordKindSpec

"""Built-in label tables for payment and income sheets.

Exposed as module constants so callers and tests can reuse or replace them.
Synonym order matters: the first label that resolves wins.
"""

__all__ = [
    "HEADER_SCAN_LIMIT",
    "SERIAL_EPOCH_OFFSET_DAYS",
    "MONTH_NAMES",
    "HEADER_SPACING_VARIANTS",
    "TOTAL_LABEL_HINTS",
    "PAYMENT_FIELDS",
    "INCOME_FIELDS",
    "PAYMENT_SPEC",
    "INCOME_SPEC",
    "KIND_SPECS",
]

HEADER_SCAN_LIMIT = 10

# Days between the spreadsheet epoch (1899-12-30) and the Unix epoch.
SERIAL_EPOCH_OFFSET_DAYS = 25569

MONTH_NAMES: dict[str, int] = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
    "يناير": 1, "فبراير": 2, "مارس": 3, "أبريل": 4, "مايو": 5, "يونيو": 6,
    "يوليو": 7, "أغسطس": 8, "سبتمبر": 9, "أكتوبر": 10, "نوفمبر": 11, "ديسمبر": 12,
}

# Header phrases exported with or without the definite article.
HEADER_SPACING_VARIANTS: tuple[tuple[str, str], ...] = (
    ("التاريخ من", "تاريخ من"),
    ("التاريخ الى", "تاريخ الى"),
)

TOTAL_LABEL_HINTS: tuple[str, ...] = ("total", "اجمالي", "إجمالي")

_DATE_FROM = ("التاريخ من", "تاريخ من", "Date From", "date from", "dateFrom")
_DATE_TO = ("التاريخ الى", "تاريخ الى", "Date To", "date to", "dateTo")
_DATE_GENERIC = ("التاريخ", "تاريخ", "Date", "date")
_TOTAL = ("الاجمالي", "الإجمالي", "Total", "total", "Amount", "amount")

PAYMENT_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("date", _DATE_FROM + _DATE_TO + _DATE_GENERIC, True, FieldType.DATE, (0, 1)),
    FieldSpec("beneficiary", ("المستفيد", "Beneficiary", "beneficiary"), False, FieldType.STRING, (2,)),
    FieldSpec("account", ("الحساب", "Account", "account"), True, FieldType.STRING, (3,)),
    FieldSpec("project", ("المشروع", "Project", "project"), True, FieldType.STRING, (4,)),
    FieldSpec(
        "description",
        ("وصف البند", "وصف", "Description", "description", "الوصف", "Description of Item"),
        False,
        FieldType.STRING,
        (5,),
    ),
    FieldSpec("total", _TOTAL, True, FieldType.DECIMAL, (6,)),
)

INCOME_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("date", _DATE_GENERIC + _DATE_FROM + _DATE_TO, True, FieldType.DATE, (0,)),
    FieldSpec("project", ("المشروع", "Project", "project"), True, FieldType.STRING, (1,)),
    FieldSpec("unit", ("الوحدة", "Unit", "unit"), False, FieldType.STRING, (2,)),
    FieldSpec("client", ("العميل", "Client", "client", "Customer", "customer"), True, FieldType.STRING, (3,)),
    FieldSpec(
        "description",
        ("الوصف", "وصف", "وصف البند", "Description", "description"),
        False,
        FieldType.STRING,
        (4,),
    ),
    FieldSpec("total", _TOTAL, True, FieldType.DECIMAL, (5,)),
    FieldSpec(
        "payment_method",
        ("وسيلة الدفع", "طريقة الدفع", "Payment Method", "payment method", "paymentMethod"),
        False,
        FieldType.STRING,
        (6,),
    ),
    FieldSpec(
        "payment_proof",
        ("إثبات الدفع", "اثبات الدفع", "Payment Proof", "payment proof", "paymentProof"),
        False,
        FieldType.STRING,
        (7,),
    ),
)

PAYMENT_SPEC = RecordKindSpec(
    kind=RecordKind.PAYMENT,
    expected_headers=(
        "التاريخ من", "التاريخ الى", "المستفيد", "الحساب", "المشروع", "وصف", "الاجمالي", "وصف البند",
        "Date From", "Date To", "Beneficiary", "Account",
    ),
    fields=PAYMENT_FIELDS,
)

INCOME_SPEC = RecordKindSpec(
    kind=RecordKind.INCOME,
    expected_headers=(
        "التاريخ", "المشروع", "الوحدة", "العميل", "الوصف", "الإجمالي", "الاجمالي", "وسيلة الدفع", "إثبات الدفع",
        "Client", "Unit", "Payment Method",
    ),
    fields=INCOME_FIELDS,
)

KIND_SPECS: dict[RecordKind, RecordKindSpec] = {
    RecordKind.PAYMENT: PAYMENT_SPEC,
    RecordKind.INCOME: INCOME_SPEC,
}
