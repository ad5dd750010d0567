"""Canonical section and field extraction shared by every encoding.

Each renderer (paginated PDF, workbook, Word document) draws the same
sections in the same order from the list built here, so field labels and
fallback text are defined exactly once.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .formatting import (
    FieldFormatter, FieldKind,
    NOT_APPLICABLE, NOT_ASSIGNED, NOT_PROVIDED, NOT_SPECIFIED,
)
from .record import Record


# Canonical section order (invariant across records)
SECTION_TITLES: List[Tuple[str, str]] = [
    ("personal", "PERSONAL INFORMATION"),
    ("identification", "IDENTIFICATION"),
    ("location", "LOCATION STATUS"),
    ("employer", "EMPLOYER DETAILS"),
    ("employment", "EMPLOYMENT INFORMATION"),
    ("flight", "FLIGHT INFORMATION"),
    ("ph_agency", "PHILIPPINE RECRUITMENT AGENCY"),
    ("sa_agency", "SAUDI RECRUITMENT AGENCY"),
    ("complaint", "COMPLAINT INFORMATION"),
]

DEFAULT_POSITION = "Housemaid"
NO_COMPLAINTS = "No complaints reported"


@dataclass(frozen=True)
class Field:
    """A label and its resolved display text."""
    label: str
    raw: Any = field(repr=False)
    kind: FieldKind
    fallback: str
    text: str


@dataclass(frozen=True)
class Section:
    """An ordered, titled group of fields rendered as one visual unit."""
    key: str
    title: str
    fields: Tuple[Field, ...]


class _SectionBuilder:
    """Collects fields for one section, resolving text as they are added."""

    def __init__(self, formatter: FieldFormatter):
        self.formatter = formatter
        self.fields: List[Field] = []

    def add(self, label: str, value: Any, kind: FieldKind = FieldKind.TEXT, fallback: str = NOT_PROVIDED):
        if kind == FieldKind.DATE:
            fallback = NOT_SPECIFIED
        text = self.formatter.format(value, kind, fallback=fallback)
        self.fields.append(Field(label=label, raw=value, kind=kind, fallback=fallback, text=text))
        return self

    def build(self, key: str, title: str) -> Section:
        return Section(key=key, title=title, fields=tuple(self.fields))


def _attr(obj: Optional[object], name: str) -> Any:
    return getattr(obj, name) if obj is not None else None


def _contract_duration(years: Optional[int]) -> Optional[str]:
    if years is None:
        return None
    return f"{years} year(s)"


def build_sections(record: Record, formatter: Optional[FieldFormatter] = None) -> List[Section]:
    """Extract the nine canonical sections of a record, in order."""
    formatter = formatter or FieldFormatter()
    titles = dict(SECTION_TITLES)
    sections = []

    info = record.personal_info
    b = _SectionBuilder(formatter)
    b.add("Full Name", _attr(info, "name"))
    b.add("Housemaid Number", record.housemaid_number, fallback=NOT_ASSIGNED)
    b.add("Email Address", _attr(info, "email"))
    b.add("Phone Number", _attr(info, "phone"))
    b.add("Nationality", _attr(info, "citizenship"), fallback=NOT_SPECIFIED)
    b.add("Country of Origin", _attr(info, "country"), fallback=NOT_SPECIFIED)
    b.add("City", _attr(info, "city"), fallback=NOT_SPECIFIED)
    b.add("Residential Address", _attr(info, "address"))
    sections.append(b.build("personal", titles["personal"]))

    identity = record.identity
    b = _SectionBuilder(formatter)
    b.add("Passport Number", _attr(identity, "passport_number"))
    b.add("Passport Issuing Country", _attr(identity, "passport_country"), fallback=NOT_SPECIFIED)
    b.add("Resident ID Number", _attr(identity, "resident_id"))
    sections.append(b.build("identification", titles["identification"]))

    location = record.location_status
    b = _SectionBuilder(formatter)
    b.add("Current Location Status", _attr(location, "is_inside_country"), FieldKind.FLAG, NOT_SPECIFIED)
    b.add("Exit Date", _attr(location, "exit_date"), FieldKind.DATE)
    b.add("Date Outside Country", _attr(location, "outside_country_date"), FieldKind.DATE)
    sections.append(b.build("location", titles["location"]))

    employer = record.employer
    b = _SectionBuilder(formatter)
    b.add("Company/Employer Name", _attr(employer, "name"))
    b.add("Contact Number", _attr(employer, "mobile_number"))
    sections.append(b.build("employer", titles["employer"]))

    employment = record.employment
    b = _SectionBuilder(formatter)
    b.add("Job Position", _attr(employment, "position"), fallback=DEFAULT_POSITION)
    b.add("Employment Status", _attr(employment, "status"), FieldKind.STATUS, NOT_SPECIFIED)
    b.add("Contract Duration", _contract_duration(_attr(employment, "contract_period_years")),
          fallback=NOT_SPECIFIED)
    b.add("Employment Start Date", _attr(employment, "start_date"), FieldKind.DATE)
    b.add("Contract End Date", _attr(employment, "end_date"), FieldKind.DATE)
    b.add("Monthly Salary", _attr(employment, "salary"), fallback=NOT_SPECIFIED)
    b.add("Status Effective Date", _attr(employment, "effective_date"), FieldKind.DATE)
    sections.append(b.build("employment", titles["employment"]))

    flight = record.flight_info
    ticket = record.air_ticket
    b = _SectionBuilder(formatter)
    b.add("Flight Date", _attr(flight, "flight_date"), FieldKind.DATE)
    b.add("Flight Number", _attr(flight, "flight_number"), fallback=NOT_SPECIFIED)
    b.add("Airline Name", _attr(flight, "airline_name"), fallback=NOT_SPECIFIED)
    b.add("Destination", _attr(flight, "destination"), fallback=NOT_SPECIFIED)
    b.add("Air Ticket Number", _attr(ticket, "ticket_number"))
    b.add("Booking Reference", _attr(ticket, "booking_reference"))
    sections.append(b.build("flight", titles["flight"]))

    for key, agency in (("ph_agency", record.recruitment_agency),
                        ("sa_agency", record.saudi_recruitment_agency)):
        b = _SectionBuilder(formatter)
        b.add("Agency Name", _attr(agency, "name"), fallback=NOT_ASSIGNED)
        b.add("License Number", _attr(agency, "license_number"))
        b.add("Contact Person", _attr(agency, "contact_person"))
        b.add("Phone Number", _attr(agency, "phone_number"))
        b.add("Email Address", _attr(agency, "email"))
        b.add("Office Address", _attr(agency, "address"))
        sections.append(b.build(key, titles[key]))

    complaint = record.complaint
    b = _SectionBuilder(formatter)
    b.add("Complaint Status", _attr(complaint, "status"), FieldKind.STATUS, NOT_SPECIFIED)
    b.add("Date Reported", _attr(complaint, "date_reported"), FieldKind.DATE)
    b.add("Date Resolved", _attr(complaint, "date_resolved"), FieldKind.DATE)
    b.add("Complaint Description", _attr(complaint, "description"), fallback=NO_COMPLAINTS)
    b.add("Resolution Details", _attr(complaint, "resolution_description"), fallback=NOT_APPLICABLE)
    sections.append(b.build("complaint", titles["complaint"]))

    return sections


# Summary sheet columns: (header, section key, field label)
SUMMARY_COLUMNS: List[Tuple[str, str, str]] = [
    ("Housemaid Number", "personal", "Housemaid Number"),
    ("Full Name", "personal", "Full Name"),
    ("Email", "personal", "Email Address"),
    ("Phone", "personal", "Phone Number"),
    ("Nationality", "personal", "Nationality"),
    ("Passport Number", "identification", "Passport Number"),
    ("Location Status", "location", "Current Location Status"),
    ("Employer", "employer", "Company/Employer Name"),
    ("Employment Status", "employment", "Employment Status"),
    ("Contract Start", "employment", "Employment Start Date"),
    ("Contract End", "employment", "Contract End Date"),
    ("Philippine Agency", "ph_agency", "Agency Name"),
    ("Saudi Agency", "sa_agency", "Agency Name"),
    ("Complaint Status", "complaint", "Complaint Status"),
    ("Flight Date", "flight", "Flight Date"),
    ("Airline", "flight", "Airline Name"),
]


def summary_row(record: Record, formatter: Optional[FieldFormatter] = None) -> Dict[str, str]:
    """One summary-sheet row for a record, keyed by column header."""
    lookup = {
        (section.key, f.label): f.text
        for section in build_sections(record, formatter)
        for f in section.fields
    }
    return {header: lookup[(key, label)] for header, key, label in SUMMARY_COLUMNS}
