"""Villager SMS report template.

Villagers without data connectivity send a fixed-format text message:

    [VILLAGER HEALTH REPORT]
    Name: Sita Devi
    Age: 34
    Village: Rampur
    Symptoms: Diarrhea
    Time: 8/14/2025, 10:02:11 AM
    [Please process this villager report]

Field labels are matched case-insensitively; line order does not matter.
"""

from dataclasses import dataclass
from datetime import datetime

SMS_HEADER = "[VILLAGER HEALTH REPORT]"
SMS_FOOTER = "[Please process this villager report]"

_FIELDS = {
    "name": "patient_name",
    "age": "age",
    "village": "village",
    "symptoms": "symptoms",
    "time": "sent_at",
}
_REQUIRED = ("patient_name", "village", "symptoms")


class SmsParseError(ValueError):
    """The SMS body does not follow the villager report template."""


@dataclass
class ParsedSmsReport:
    patient_name: str
    village: str
    symptoms: str
    age: int | None = None
    sent_at: str | None = None


def render_sms_report(
    patient_name: str,
    village: str,
    symptoms: str,
    age: int | None = None,
    sent_at: datetime | None = None,
) -> str:
    sent_at = sent_at or datetime.now()
    return "\n".join(
        [
            SMS_HEADER,
            f"Name: {patient_name}",
            f"Age: {age if age is not None else ''}",
            f"Village: {village}",
            f"Symptoms: {symptoms}",
            f"Time: {sent_at.strftime('%m/%d/%Y, %I:%M:%S %p')}",
            SMS_FOOTER,
        ]
    )


def parse_sms_report(body: str) -> ParsedSmsReport:
    lines = [line.strip() for line in body.strip().splitlines() if line.strip()]
    if not lines or lines[0].upper() != SMS_HEADER:
        raise SmsParseError("missing villager report header")

    values: dict[str, str] = {}
    for line in lines[1:]:
        label, sep, value = line.partition(":")
        if not sep:
            continue
        field = _FIELDS.get(label.strip().lower())
        if field and field not in values:
            values[field] = value.strip()

    missing = [field for field in _REQUIRED if not values.get(field)]
    if missing:
        raise SmsParseError(f"missing fields: {', '.join(missing)}")

    return ParsedSmsReport(
        patient_name=values["patient_name"],
        village=values["village"],
        symptoms=values["symptoms"],
        age=_parse_age(values.get("age")),
        sent_at=values.get("sent_at") or None,
    )


def _parse_age(raw: str | None) -> int | None:
    if not raw:
        return None
    try:
        age = int(raw)
    except ValueError:
        return None
    return age if 0 <= age <= 150 else None
