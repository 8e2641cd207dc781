"""Seed Data - sample inquiries for local development.

Run after migrations:
    python -m inquiry_api.db.seed

Invariants:
    - Resolved/closed samples carry resolved_at relative to the seeding time
    - Inserts go straight through the ORM (no service side effects)
    - The command-line entry point disposes its engine before exiting
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from inquiry_api.config import get_settings
from inquiry_api.db.session import create_engine, create_session_factory
from inquiry_api.infrastructure.observability import setup_logging
from inquiry_api.models.inquiry import Inquiry

logger = logging.getLogger(__name__)

# (fields, resolved_at offset or None)
SAMPLE_INQUIRIES: list[tuple[dict, timedelta | None]] = [
    ({
        "name": "John Smith",
        "email": "john.smith@example.com",
        "phone": "+1234567890",
        "category": "Trading",
        "subject": "How to place a market order?",
        "message": "I am new to trading and would like to understand how to place a market order for stocks. Can you provide step-by-step guidance?",
        "status": "pending",
        "priority": "medium",
    }, None),
    ({
        "name": "Sarah Johnson",
        "email": "sarah.j@example.com",
        "phone": "+1987654321",
        "category": "Market Data",
        "subject": "Real-time data subscription",
        "message": "I need information about subscribing to real-time market data feeds. What are the available packages and pricing?",
        "status": "in_progress",
        "priority": "high",
    }, None),
    ({
        "name": "Michael Chen",
        "email": "mchen@example.com",
        "phone": None,
        "category": "Technical Issues",
        "subject": "Unable to login to trading platform",
        "message": "I have been trying to login to the trading platform for the past hour but keep getting an error message. Please help urgently.",
        "status": "resolved",
        "priority": "urgent",
        "resolution_notes": "Password reset link sent. User successfully logged in.",
    }, timedelta(days=1)),
    ({
        "name": "Emily Rodriguez",
        "email": "emily.r@example.com",
        "phone": "+1555123456",
        "category": "General Questions",
        "subject": "Account verification process",
        "message": "What documents are required for account verification? How long does the verification process typically take?",
        "status": "pending",
        "priority": "low",
    }, None),
    ({
        "name": "David Wilson",
        "email": "dwilson@example.com",
        "phone": "+1555987654",
        "category": "Trading",
        "subject": "Stop-loss order not executed",
        "message": "My stop-loss order for XYZ stock was not executed even though the price reached the trigger level. Can you investigate this issue?",
        "status": "in_progress",
        "priority": "urgent",
    }, None),
    ({
        "name": "Lisa Anderson",
        "email": "lisa.anderson@example.com",
        "phone": "+1555246810",
        "category": "Market Data",
        "subject": "Historical data download",
        "message": "How can I download historical price data for the last 5 years? Is there a bulk download option available?",
        "status": "resolved",
        "priority": "medium",
        "resolution_notes": "Provided instructions for bulk data export via API. User confirmed successful download.",
    }, timedelta(hours=3)),
    ({
        "name": "Robert Taylor",
        "email": "rtaylor@example.com",
        "phone": None,
        "category": "Technical Issues",
        "subject": "Mobile app crashing on Android",
        "message": "The mobile trading app keeps crashing whenever I try to view my portfolio on my Android device (Samsung Galaxy S21).",
        "status": "pending",
        "priority": "high",
    }, None),
    ({
        "name": "Jennifer Martinez",
        "email": "jmartinez@example.com",
        "phone": "+1555369258",
        "category": "General Questions",
        "subject": "Trading hours and holidays",
        "message": "What are the regular trading hours? Is the exchange open on public holidays?",
        "status": "closed",
        "priority": "low",
        "resolution_notes": "Provided trading hours information and holiday schedule. User satisfied.",
    }, timedelta(days=2)),
    ({
        "name": "Christopher Lee",
        "email": "clee@example.com",
        "phone": "+1555147258",
        "category": "Trading",
        "subject": "Margin trading requirements",
        "message": "I would like to start margin trading. What are the requirements and what is the maximum leverage available?",
        "status": "pending",
        "priority": "medium",
    }, None),
    ({
        "name": "Amanda White",
        "email": "awhite@example.com",
        "phone": "+1555789456",
        "category": "Market Data",
        "subject": "API rate limits",
        "message": "I am developing a trading bot and need to know what the API rate limits are for market data requests.",
        "status": "in_progress",
        "priority": "medium",
    }, None),
]


def build_sample_inquiries(now: datetime) -> list[Inquiry]:
    inquiries = []
    for fields, resolved_ago in SAMPLE_INQUIRIES:
        resolved_at = now - resolved_ago if resolved_ago is not None else None
        inquiries.append(Inquiry(**fields, resolved_at=resolved_at))
    return inquiries


async def seed_inquiries(
    session_factory: async_sessionmaker[AsyncSession],
) -> int:
    """Insert the sample inquiries and return how many were written."""
    inquiries = build_sample_inquiries(datetime.now(timezone.utc))
    async with session_factory() as session:
        session.add_all(inquiries)
        await session.commit()
    logger.info(f"Successfully seeded {len(inquiries)} inquiries.")
    return len(inquiries)


async def seed_database(engine: AsyncEngine) -> int:
    """Seed through the given engine, then release its connection pool."""
    try:
        return await seed_inquiries(create_session_factory(engine))
    finally:
        await engine.dispose()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    asyncio.run(seed_database(create_engine(settings.database_url)))


if __name__ == "__main__":
    main()
