"""Typed profile record with optional sub-records, plus file loading."""

import base64
import binascii
import json
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import yaml

from .errors import RecordFormatError

DateValue = Union[date, datetime, str]


@dataclass(frozen=True)
class PersonalInfo:
    """Name and contact details."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    citizenship: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class Identity:
    """Passport and residency identifiers."""
    passport_number: Optional[str] = None
    passport_country: Optional[str] = None
    resident_id: Optional[str] = None


@dataclass(frozen=True)
class LocationStatus:
    """Whether the subject is inside the country, with exit dates."""
    is_inside_country: Optional[bool] = None
    exit_date: Optional[DateValue] = None
    outside_country_date: Optional[DateValue] = None


@dataclass(frozen=True)
class Employer:
    name: Optional[str] = None
    mobile_number: Optional[str] = None


@dataclass(frozen=True)
class Employment:
    """Contract terms and current employment status."""
    position: Optional[str] = None
    status: Optional[str] = None  # e.g. "active", "terminated"
    contract_period_years: Optional[int] = None
    start_date: Optional[DateValue] = None
    end_date: Optional[DateValue] = None
    salary: Optional[str] = None
    effective_date: Optional[DateValue] = None


@dataclass(frozen=True)
class FlightInfo:
    flight_date: Optional[DateValue] = None
    flight_number: Optional[str] = None
    airline_name: Optional[str] = None
    destination: Optional[str] = None


@dataclass(frozen=True)
class AirTicket:
    ticket_number: Optional[str] = None
    booking_reference: Optional[str] = None


@dataclass(frozen=True)
class RecruitmentAgency:
    """A recruitment agency (Philippine or Saudi side)."""
    name: Optional[str] = None
    license_number: Optional[str] = None
    contact_person: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class Complaint:
    status: Optional[str] = None  # e.g. "none", "open", "resolved"
    date_reported: Optional[DateValue] = None
    date_resolved: Optional[DateValue] = None
    description: Optional[str] = None
    resolution_description: Optional[str] = None


@dataclass(frozen=True)
class Record:
    """The complete profile being reported on.

    Every sub-record may be ``None``; absence is a normal state and is
    rendered with fallback text rather than treated as an error.
    """
    id: str
    housemaid_number: Optional[str] = None
    personal_info: Optional[PersonalInfo] = None
    identity: Optional[Identity] = None
    location_status: Optional[LocationStatus] = None
    employer: Optional[Employer] = None
    employment: Optional[Employment] = None
    flight_info: Optional[FlightInfo] = None
    air_ticket: Optional[AirTicket] = None
    recruitment_agency: Optional[RecruitmentAgency] = None
    saudi_recruitment_agency: Optional[RecruitmentAgency] = None
    complaint: Optional[Complaint] = None
    profile_photo: Optional[bytes] = field(default=None, repr=False)

    @property
    def display_name(self) -> str:
        """Subject name used in headers and file names."""
        if self.personal_info and self.personal_info.name and self.personal_info.name.strip():
            return self.personal_info.name.strip()
        return "Unnamed"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Record":
        """Build a Record from a camelCase or snake_case mapping."""
        if not isinstance(data, dict):
            raise RecordFormatError(f"Record must be a mapping, got {type(data).__name__}")

        photo = _get(data, "profilePhoto", "profile_photo")
        if isinstance(photo, dict):
            photo = _get(photo, "fileData", "file_data")

        record_id = _get(data, "id")
        if record_id is None:
            raise RecordFormatError("Record is missing an 'id'")

        return cls(
            id=str(record_id),
            housemaid_number=_get(data, "housemaidNumber", "housemaid_number"),
            personal_info=_build(PersonalInfo, _get(data, "personalInfo", "personal_info"), {
                "name": ("name",),
                "email": ("email",),
                "phone": ("phone",),
                "citizenship": ("citizenship",),
                "country": ("country",),
                "city": ("city",),
                "address": ("address",),
            }),
            identity=_build(Identity, _get(data, "identity"), {
                "passport_number": ("passportNumber", "passport_number"),
                "passport_country": ("passportCountry", "passport_country"),
                "resident_id": ("residentId", "resident_id"),
            }),
            location_status=_build(LocationStatus, _get(data, "locationStatus", "location_status"), {
                "is_inside_country": ("isInsideCountry", "is_inside_country"),
                "exit_date": ("exitDate", "exit_date"),
                "outside_country_date": ("outsideCountryDate", "outside_country_date"),
            }),
            employer=_build(Employer, _get(data, "employer"), {
                "name": ("name",),
                "mobile_number": ("mobileNumber", "mobile_number"),
            }),
            employment=_build(Employment, _get(data, "employment"), {
                "position": ("position",),
                "status": ("status",),
                "contract_period_years": ("contractPeriodYears", "contract_period_years"),
                "start_date": ("startDate", "start_date"),
                "end_date": ("endDate", "end_date"),
                "salary": ("salary",),
                "effective_date": ("effectiveDate", "effective_date"),
            }),
            flight_info=_build(FlightInfo, _get(data, "flightInfo", "flight_info"), {
                "flight_date": ("flightDate", "flight_date"),
                "flight_number": ("flightNumber", "flight_number"),
                "airline_name": ("airlineName", "airline_name"),
                "destination": ("destination",),
            }),
            air_ticket=_build(AirTicket, _get(data, "airTicket", "air_ticket"), {
                "ticket_number": ("ticketNumber", "ticket_number"),
                "booking_reference": ("bookingReference", "booking_reference"),
            }),
            recruitment_agency=_build_agency(_get(data, "recruitmentAgency", "recruitment_agency")),
            saudi_recruitment_agency=_build_agency(
                _get(data, "saudiRecruitmentAgency", "saudi_recruitment_agency")
            ),
            complaint=_build(Complaint, _get(data, "complaint"), {
                "status": ("status",),
                "date_reported": ("dateReported", "date_reported"),
                "date_resolved": ("dateResolved", "date_resolved"),
                "description": ("description",),
                "resolution_description": ("resolutionDescription", "resolution_description"),
            }),
            profile_photo=decode_file_data(photo),
        )


def _get(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _build(cls, data: Any, key_map: Dict[str, tuple]):
    """Construct a sub-record from a mapping, or None when absent."""
    if data is None:
        return None
    if not isinstance(data, dict):
        raise RecordFormatError(f"{cls.__name__} must be a mapping, got {type(data).__name__}")
    kwargs = {attr: _get(data, *keys) for attr, keys in key_map.items()}
    return cls(**kwargs)


def _build_agency(data: Any) -> Optional[RecruitmentAgency]:
    return _build(RecruitmentAgency, data, {
        "name": ("name",),
        "license_number": ("licenseNumber", "license_number"),
        "contact_person": ("contactPerson", "contact_person"),
        "phone_number": ("phoneNumber", "phone_number"),
        "email": ("email",),
        "address": ("address",),
    })


def decode_file_data(value: Any) -> Optional[bytes]:
    """Turn raw bytes, base64 text or a data URL into bytes.

    Undecodable text is passed through as UTF-8 bytes so the image loader
    can report it as an unreadable image instead of failing the record.
    """
    if value is None or value == "":
        return None
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise RecordFormatError(f"Unsupported file data type: {type(value).__name__}")

    payload = value
    if payload.startswith("data:") and "," in payload:
        payload = payload.split(",", 1)[1]
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return value.encode("utf-8")


def load_records(path: Path) -> List[Record]:
    """Load one record or a list of records from a JSON or YAML file."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise RecordFormatError(f"Could not parse {path}: {exc}") from exc

    if data is None:
        return []
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise RecordFormatError(f"{path} must hold a record or a list of records")
    return [Record.from_dict(item) for item in data]
