"""Generate plausible synthetic profile records for demos and tests."""

from datetime import date, timedelta
from typing import List, Optional
import numpy as np
from faker import Faker

from .record import (
    AirTicket, Complaint, Employer, Employment, FlightInfo, Identity,
    LocationStatus, PersonalInfo, Record, RecruitmentAgency,
)


# Constants for data generation
NATIONALITIES = ["Filipino", "Indonesian", "Sri Lankan", "Kenyan", "Ugandan", "Ethiopian"]
COUNTRIES = {
    "Filipino": "Philippines",
    "Indonesian": "Indonesia",
    "Sri Lankan": "Sri Lanka",
    "Kenyan": "Kenya",
    "Ugandan": "Uganda",
    "Ethiopian": "Ethiopia",
}
EMPLOYMENT_STATUSES = ["active", "terminated", "pending", "completed"]
COMPLAINT_STATUSES = ["none", "open", "investigating", "resolved"]
AIRLINES = ["Saudia", "Philippine Airlines", "Cebu Pacific", "Flynas", "Emirates", "Qatar Airways"]
DESTINATIONS = ["Riyadh", "Jeddah", "Dammam", "Manila", "Cebu"]
POSITIONS = ["Housemaid", "Nanny", "Cook", "Caregiver", "Driver"]


def _maybe(rng: np.random.Generator, probability: float) -> bool:
    return bool(rng.random() < probability)


def _random_date(rng: np.random.Generator, start: date, span_days: int) -> date:
    return start + timedelta(days=int(rng.integers(0, span_days)))


def _agency(rng: np.random.Generator, fake: Faker, prefix: str) -> RecruitmentAgency:
    return RecruitmentAgency(
        name=f"{fake.company()} Manpower",
        license_number=f"{prefix}-{rng.integers(1000, 9999)}-{rng.integers(10, 99)}",
        contact_person=fake.name() if _maybe(rng, 0.8) else None,
        phone_number=fake.phone_number() if _maybe(rng, 0.8) else None,
        email=fake.company_email() if _maybe(rng, 0.7) else None,
        address=fake.address().replace("\n", ", ") if _maybe(rng, 0.7) else None,
    )


def generate_record(
    rng: np.random.Generator,
    fake: Faker,
    index: int,
    photo: Optional[bytes] = None,
) -> Record:
    """Build one synthetic record.

    Optional sub-records (Saudi agency, flight, air ticket) and optional
    fields are left out at random so fallback rendering is exercised.
    """
    nationality = str(rng.choice(NATIONALITIES))
    start = _random_date(rng, date(2021, 1, 1), 900)
    years = int(rng.choice([1, 2, 3]))
    is_inside = _maybe(rng, 0.7)
    complaint_status = str(rng.choice(COMPLAINT_STATUSES, p=[0.6, 0.15, 0.1, 0.15]))

    personal = PersonalInfo(
        name=fake.name(),
        email=fake.free_email() if _maybe(rng, 0.8) else None,
        phone=fake.phone_number(),
        citizenship=nationality,
        country=COUNTRIES[nationality],
        city=fake.city() if _maybe(rng, 0.8) else None,
        address=fake.address().replace("\n", ", "),
    )

    identity = Identity(
        passport_number=f"P{rng.integers(1000000, 9999999)}{fake.random_uppercase_letter()}",
        passport_country=COUNTRIES[nationality],
        resident_id=str(rng.integers(2_000_000_000, 2_999_999_999)) if _maybe(rng, 0.6) else None,
    )

    exit_date = None if is_inside else _random_date(rng, start, 700)
    location = LocationStatus(
        is_inside_country=is_inside,
        exit_date=exit_date,
        outside_country_date=exit_date + timedelta(days=1) if exit_date else None,
    )

    employment = Employment(
        position=str(rng.choice(POSITIONS)) if _maybe(rng, 0.6) else None,
        status=str(rng.choice(EMPLOYMENT_STATUSES)),
        contract_period_years=years,
        start_date=start,
        end_date=start + timedelta(days=365 * years),
        salary=f"{int(rng.integers(12, 25)) * 100} SAR" if _maybe(rng, 0.7) else None,
        effective_date=_random_date(rng, start, 365) if _maybe(rng, 0.5) else None,
    )

    flight = None
    ticket = None
    if _maybe(rng, 0.6):
        flight = FlightInfo(
            flight_date=start - timedelta(days=int(rng.integers(1, 10))),
            flight_number=f"{fake.random_uppercase_letter()}{fake.random_uppercase_letter()}"
                          f"{rng.integers(100, 999)}",
            airline_name=str(rng.choice(AIRLINES)),
            destination=str(rng.choice(DESTINATIONS)),
        )
        if _maybe(rng, 0.8):
            ticket = AirTicket(
                ticket_number=str(rng.integers(10**12, 10**13 - 1)),
                booking_reference=fake.bothify("??####").upper(),
            )

    reported = None
    resolved = None
    description = None
    resolution = None
    if complaint_status != "none":
        reported = _random_date(rng, start, 500)
        description = fake.paragraph(nb_sentences=int(rng.integers(1, 4)))
        if complaint_status == "resolved":
            resolved = reported + timedelta(days=int(rng.integers(3, 60)))
            resolution = fake.sentence(nb_words=12)

    return Record(
        id=f"HM-{index:05d}",
        housemaid_number=f"HM{rng.integers(100000, 999999)}" if _maybe(rng, 0.85) else None,
        personal_info=personal,
        identity=identity,
        location_status=location,
        employer=Employer(name=fake.name(), mobile_number=fake.phone_number()),
        employment=employment,
        flight_info=flight,
        air_ticket=ticket,
        recruitment_agency=_agency(rng, fake, "POEA"),
        saudi_recruitment_agency=_agency(rng, fake, "MOL") if _maybe(rng, 0.6) else None,
        complaint=Complaint(
            status=complaint_status,
            date_reported=reported,
            date_resolved=resolved,
            description=description,
            resolution_description=resolution,
        ),
        profile_photo=photo,
    )


def generate_records(count: int, seed: int = 42, photo: Optional[bytes] = None) -> List[Record]:
    """Generate ``count`` records. The same seed always yields the same records."""
    rng = np.random.default_rng(seed)
    fake = Faker()
    fake.seed_instance(int(rng.integers(0, 2**31)))
    return [generate_record(rng, fake, i + 1, photo) for i in range(count)]
