"""Shared fixtures for the report engine tests."""

import io
from datetime import date, datetime

import pytest
from PIL import Image as PILImage

from profile_report.config import BrandConfig, RenderOptions
from profile_report.record import (
    AirTicket, Complaint, Employer, Employment, FlightInfo, Identity,
    LocationStatus, PersonalInfo, Record, RecruitmentAgency,
)


def _png_bytes(color: str = "red", size: int = 16) -> bytes:
    buf = io.BytesIO()
    PILImage.new("RGB", (size, size), color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return _png_bytes()


@pytest.fixture
def malformed_bytes() -> bytes:
    return b"this is definitely not an image"


@pytest.fixture
def generated_at() -> datetime:
    return datetime(2024, 1, 5, 15, 7)


@pytest.fixture
def full_record(png_bytes) -> Record:
    """Record with every sub-record present."""
    return Record(
        id="rec-1",
        housemaid_number="HM100200",
        personal_info=PersonalInfo(
            name="Maria  Santos Cruz",
            email="maria@example.com",
            phone="+63 912 345 6789",
            citizenship="Filipino",
            country="Philippines",
            city="Quezon City",
            address="12 Mabini Street, Barangay Central, Quezon City",
        ),
        identity=Identity(passport_number="P1234567A", passport_country="Philippines",
                          resident_id="2345678901"),
        location_status=LocationStatus(is_inside_country=True),
        employer=Employer(name="Abdullah Al Harbi", mobile_number="+966 55 123 4567"),
        employment=Employment(
            position="Housemaid",
            status="active",
            contract_period_years=2,
            start_date=date(2023, 3, 1),
            end_date="2025-03-01",
            salary="1500 SAR",
            effective_date=date(2023, 3, 1),
        ),
        flight_info=FlightInfo(flight_date="2023-02-25T08:30:00Z", flight_number="SV871",
                               airline_name="Saudia", destination="Riyadh"),
        air_ticket=AirTicket(ticket_number="0651234567890", booking_reference="ABC123"),
        recruitment_agency=RecruitmentAgency(
            name="Manila Manpower Services", license_number="POEA-123-45",
            contact_person="Jose Reyes", phone_number="+63 2 8123 4567",
            email="info@manilamanpower.example", address="Ermita, Manila",
        ),
        saudi_recruitment_agency=RecruitmentAgency(
            name="Riyadh Recruitment Co", license_number="MOL-9876",
            contact_person="Fahad Al Qahtani", phone_number="+966 11 234 5678",
            email="office@riyadhrecruit.example", address="Olaya, Riyadh",
        ),
        complaint=Complaint(status="resolved", date_reported="2024-01-02",
                            date_resolved="2024-01-20",
                            description="Delayed salary payment for December.",
                            resolution_description="Salary paid in full."),
        profile_photo=png_bytes,
    )


@pytest.fixture
def sparse_record() -> Record:
    """Record with only a name; every other sub-record absent."""
    return Record(id="rec-2", personal_info=PersonalInfo(name="Ana Lopez"))


@pytest.fixture
def brand(png_bytes) -> BrandConfig:
    return BrandConfig(company_name="Acme Staffing", logo_image_bytes=png_bytes,
                       copyright_text="© 2024 Acme Staffing")


@pytest.fixture
def options() -> RenderOptions:
    return RenderOptions(include_logo=True, include_photo=True)
