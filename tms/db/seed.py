"""
Demo data for TMS.

Generates the shipments and user accounts the in-memory stores start with.
Demo accounts:
    Admin:    admin@tms.com / admin123
    Employee: employee@tms.com / employee123
"""
import logging
import random
from datetime import datetime, timedelta
from typing import Optional

from tms.core.security import get_password_hash
from tms.models.base import new_id, utcnow
from tms.models.enums import Priority, ShipmentStatus, UserRole
from tms.models.shipment import Shipment
from tms.models.user import User

logger = logging.getLogger(__name__)

CARRIERS = [
    "FedEx", "UPS", "DHL Express", "USPS", "Amazon Logistics",
    "XPO Logistics", "J.B. Hunt", "Schneider", "Swift Transportation",
    "Werner Enterprises", "Old Dominion", "Estes Express", "YRC Freight",
    "Saia LTL Freight", "ABF Freight",
]

SHIPPERS = [
    "Tech Solutions Inc.", "Global Electronics Ltd.", "Prime Manufacturing Co.",
    "Summit Industries", "Pacific Trade Corp.", "Atlantic Imports LLC",
    "Mountain View Supplies", "Sunrise Distribution", "Metro Logistics Group",
    "Continental Goods Inc.", "Apex Trading Co.", "Liberty Exports",
    "Gateway Enterprises", "Pioneer Products", "Stellar Commodities",
]

# (address, city, state)
LOCATIONS = [
    ("123 Broadway Ave", "New York", "NY"),
    ("456 Sunset Blvd", "Los Angeles", "CA"),
    ("789 Michigan Ave", "Chicago", "IL"),
    ("321 Main St", "Houston", "TX"),
    ("654 Desert Rd", "Phoenix", "AZ"),
    ("987 Liberty Ave", "Philadelphia", "PA"),
    ("147 Alamo Plaza", "San Antonio", "TX"),
    ("258 Harbor Dr", "San Diego", "CA"),
    ("369 Commerce St", "Dallas", "TX"),
    ("741 Tech Park Way", "San Jose", "CA"),
    ("852 Congress Ave", "Austin", "TX"),
    ("963 Ocean Blvd", "Jacksonville", "FL"),
    ("159 Pike St", "Seattle", "WA"),
    ("357 Mountain View Rd", "Denver", "CO"),
    ("468 Harbor Walk", "Boston", "MA"),
    ("579 Peachtree St", "Atlanta", "GA"),
    ("680 Biscayne Blvd", "Miami", "FL"),
    ("791 Pearl District Way", "Portland", "OR"),
    ("802 Strip Ave", "Las Vegas", "NV"),
    ("913 Nicollet Mall", "Minneapolis", "MN"),
]

CURRENCIES = ["USD", "EUR", "GBP", "CAD"]
TRACKING_PREFIXES = ["TRK", "SHP", "PKG", "FRT"]
FRAGILE_NOTE = "Handle with care - Fragile contents"

DEMO_USERS = [
    # (id, email, name, role, password)
    ("1", "admin@tms.com", "John Admin", UserRole.ADMIN, "admin123"),
    ("2", "employee@tms.com", "Jane Employee", UserRole.EMPLOYEE, "employee123"),
]


def _random_date(rng: random.Random, start: datetime, end: datetime) -> datetime:
    return start + (end - start) * rng.random()


def _format_location(location: tuple[str, str, str]) -> str:
    address, city, state = location
    return f"{address}, {city}, {state}"


def generate_tracking_number(rng: random.Random) -> str:
    """Seed-data tracking number: prefix plus 12 digits."""
    digits = "".join(rng.choice("0123456789") for _ in range(12))
    return f"{rng.choice(TRACKING_PREFIXES)}{digits}"


def generate_shipments(count: int, seed: Optional[int] = None) -> list[Shipment]:
    """Generate ``count`` random shipments, newest ``created_at`` first.

    Pickups fall in the last 90 days, deliveries between pickup and 30 days
    ahead, and creation between 90 days ago and pickup.
    """
    rng = random.Random(seed)
    now = utcnow()
    three_months_ago = now - timedelta(days=90)
    one_month_ahead = now + timedelta(days=30)

    shipments: list[Shipment] = []
    tracking_numbers: set[str] = set()

    for _ in range(count):
        pickup_loc = rng.choice(LOCATIONS)
        delivery_loc = rng.choice([loc for loc in LOCATIONS if loc != pickup_loc])

        pickup_date = _random_date(rng, three_months_ago, now)
        delivery_date = _random_date(rng, pickup_date, one_month_ahead)
        created_at = _random_date(rng, three_months_ago, pickup_date)

        tracking_number = generate_tracking_number(rng)
        while tracking_number in tracking_numbers:
            tracking_number = generate_tracking_number(rng)
        tracking_numbers.add(tracking_number)

        shipments.append(
            Shipment(
                id=new_id(),
                shipper_name=rng.choice(SHIPPERS),
                carrier_name=rng.choice(CARRIERS),
                pickup_location=_format_location(pickup_loc),
                delivery_location=_format_location(delivery_loc),
                pickup_date=pickup_date,
                delivery_date=delivery_date,
                status=rng.choice(list(ShipmentStatus)),
                tracking_number=tracking_number,
                weight=round(rng.random() * 5000 + 10, 2),
                dimensions=(
                    f"{rng.randint(10, 109)}x{rng.randint(10, 109)}x{rng.randint(10, 109)} cm"
                ),
                rate=round(rng.random() * 5000 + 100, 2),
                currency=rng.choice(CURRENCIES),
                priority=rng.choice(list(Priority)),
                flagged=rng.random() > 0.85,
                notes=FRAGILE_NOTE if rng.random() > 0.7 else None,
                created_at=created_at,
                updated_at=created_at,
            )
        )

    shipments.sort(key=lambda s: s.created_at, reverse=True)
    logger.info("Generated %d demo shipments", len(shipments))
    return shipments


def generate_users() -> list[User]:
    """Create the demo accounts with bcrypt-hashed passwords."""
    created_at = utcnow()
    return [
        User(
            id=user_id,
            email=email,
            name=name,
            role=role,
            hashed_password=get_password_hash(password),
            created_at=created_at,
        )
        for user_id, email, name, role, password in DEMO_USERS
    ]
