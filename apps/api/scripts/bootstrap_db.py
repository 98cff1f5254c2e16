"""Create database schema and seed sample agents, tags and leads for development."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from anvaya.core.config import settings
from anvaya.core.logging import configure_logging
from anvaya.db.session import SessionLocal, engine
from anvaya.models import Comment, Lead, LeadPriority, LeadSource, LeadStatus, SalesAgent, Tag
from anvaya.models.base import Base

logger = logging.getLogger("anvaya.scripts.bootstrap_db")

AGENTS = [
	{"id": "65a1f0c2e4b0a1b2c3d4e5f1", "name": "Priya Sharma", "email": "priya@anvaya.example"},
	{"id": "65a1f0c2e4b0a1b2c3d4e5f2", "name": "Rahul Mehta", "email": "rahul@anvaya.example"},
]

TAGS = ["High Value", "Follow-up", "Enterprise", "Urgent"]

LEADS = [
	{
		"id": "65a1f0c2e4b0a1b2c3d4e601",
		"name": "Acme Corp",
		"source": LeadSource.REFERRAL,
		"agent": "65a1f0c2e4b0a1b2c3d4e5f1",
		"status": LeadStatus.NEW,
		"tags": ["High Value"],
		"time_to_close": 30,
		"priority": LeadPriority.HIGH,
	},
	{
		"id": "65a1f0c2e4b0a1b2c3d4e602",
		"name": "Globex Ltd",
		"source": LeadSource.WEBSITE,
		"agent": "65a1f0c2e4b0a1b2c3d4e5f2",
		"status": LeadStatus.PROPOSAL_SENT,
		"tags": ["Enterprise", "Follow-up"],
		"time_to_close": 14,
		"priority": LeadPriority.MEDIUM,
	},
	{
		"id": "65a1f0c2e4b0a1b2c3d4e603",
		"name": "Initech",
		"source": LeadSource.COLD_CALL,
		"agent": "65a1f0c2e4b0a1b2c3d4e5f1",
		"status": LeadStatus.CLOSED,
		"tags": ["Urgent"],
		"time_to_close": 7,
		"priority": LeadPriority.LOW,
		"closed_days_ago": 3,
	},
]

COMMENTS = [
	{
		"id": "65a1f0c2e4b0a1b2c3d4e701",
		"lead": "65a1f0c2e4b0a1b2c3d4e601",
		"author": "65a1f0c2e4b0a1b2c3d4e5f1",
		"text": "Intro call booked for next week.",
	},
]


async def create_schema() -> None:
	"""Create tables if they do not exist."""

	async with engine.begin() as conn:
		await conn.run_sync(Base.metadata.create_all)


async def seed_agents_and_tags() -> None:
	"""Upsert demo agents and insert any missing tags."""

	async with SessionLocal() as session:
		async with session.begin():
			for agent_data in AGENTS:
				agent = await session.get(SalesAgent, agent_data["id"])
				if agent is None:
					session.add(SalesAgent(**agent_data))
				else:
					agent.name = agent_data["name"]
					agent.email = agent_data["email"]

			existing = set((await session.execute(select(Tag.name))).scalars().all())
			for name in TAGS:
				if name not in existing:
					session.add(Tag(name=name))


async def seed_leads() -> None:
	"""Upsert demo leads and their comments."""

	now = datetime.now(timezone.utc)

	async with SessionLocal() as session:
		async with session.begin():
			for lead_data in LEADS:
				closed_days_ago = lead_data.get("closed_days_ago")
				closed_at = now - timedelta(days=closed_days_ago) if closed_days_ago is not None else None

				lead = await session.get(Lead, lead_data["id"])
				if lead is None:
					lead = Lead(id=lead_data["id"])
					session.add(lead)
				lead.name = lead_data["name"]
				lead.source = lead_data["source"]
				lead.sales_agent_id = lead_data["agent"]
				lead.status = lead_data["status"]
				lead.tags = lead_data["tags"]
				lead.time_to_close = lead_data["time_to_close"]
				lead.priority = lead_data["priority"]
				lead.closed_at = closed_at

			await session.flush()

			for comment_data in COMMENTS:
				if await session.get(Comment, comment_data["id"]) is None:
					session.add(
						Comment(
							id=comment_data["id"],
							lead_id=comment_data["lead"],
							author_id=comment_data["author"],
							comment_text=comment_data["text"],
						)
					)


async def main() -> None:
	configure_logging(settings.log_level)
	await create_schema()
	await seed_agents_and_tags()
	await seed_leads()
	logger.info("Database schema ensured and demo data seeded.")
	await engine.dispose()


if __name__ == "__main__":
	asyncio.run(main())
