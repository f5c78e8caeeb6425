#!/usr/bin/env python3
"""
Job Seed Script

Inserts a handful of sample job postings so the swipe feed has something
to offer in development. Jobs whose external_id is already stored are
skipped, so the script can be re-run safely.

Usage:
    # Seed the database configured by DATABASE_URL
    python scripts/seed_jobs.py

    # Only print what would be inserted
    python scripts/seed_jobs.py --dry-run
"""

import asyncio
import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from jobswipe.database import async_session, init_db
from jobswipe.schemas import JobCreate
from jobswipe.services.jobs import create_job, get_existing_external_ids

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


# ==============================================================================
# Seed Data
# ==============================================================================

SAMPLE_JOBS = [
    {
        "external_id": "job-001",
        "title": "Senior Full Stack Engineer",
        "company_name": "TechCorp Inc.",
        "city": "San Francisco",
        "country": "USA",
        "latitude": 37.7749,
        "longitude": -122.4194,
        "salary_min": 150000,
        "salary_max": 200000,
        "work_mode": "hybrid",
        "summary": "Build web applications with React, Node.js and cloud technologies.",
        "description": "5+ years with JavaScript/TypeScript, React, Node.js and SQL. AWS or GCP is a plus.",
        "perks": {"healthInsurance": True, "stockOptions": True},
        "apply_url": "https://example.com/apply/job-001",
        "source": "internal",
    },
    {
        "external_id": "job-002",
        "title": "Frontend Developer",
        "company_name": "Design Studio",
        "city": "New York",
        "country": "USA",
        "latitude": 40.7128,
        "longitude": -74.0060,
        "salary_min": 100000,
        "salary_max": 140000,
        "work_mode": "remote",
        "summary": "Create responsive user interfaces with React and modern CSS.",
        "description": "3+ years of React, strong CSS skills, Tailwind or similar frameworks.",
        "perks": {"remote": True, "flexibleHours": True, "learningBudget": True},
        "apply_url": "https://example.com/apply/job-002",
        "source": "internal",
    },
    {
        "external_id": "job-003",
        "title": "Backend Engineer - Python",
        "company_name": "DataFlow Solutions",
        "city": "Austin",
        "country": "USA",
        "latitude": 30.2672,
        "longitude": -97.7431,
        "salary_min": 120000,
        "salary_max": 160000,
        "work_mode": "onsite",
        "summary": "Build APIs and data pipelines using Python, FastAPI and PostgreSQL.",
        "description": "Python, FastAPI, PostgreSQL and message queues. Kafka experience welcome.",
        "perks": {"healthInsurance": True, "gym": True},
        "apply_url": "https://example.com/apply/job-003",
        "source": "internal",
    },
    {
        "external_id": "job-004",
        "title": "Machine Learning Engineer",
        "company_name": "Neural Labs",
        "city": "San Francisco",
        "country": "USA",
        "salary_min": 170000,
        "salary_max": 230000,
        "work_mode": "remote",
        "summary": "Train and ship models for document understanding.",
        "description": "PyTorch, Python and NLP experience. Comfortable owning models in production.",
        "perks": {"remote": True, "stockOptions": True},
        "apply_url": "https://example.com/apply/job-004",
        "source": "internal",
    },
    {
        "external_id": "job-005",
        "title": "DevOps Engineer",
        "company_name": "CloudScale",
        "city": "London",
        "country": "UK",
        "salary_min": 70000,
        "salary_max": 95000,
        "currency": "GBP",
        "work_mode": "hybrid",
        "summary": "Own CI/CD and Kubernetes infrastructure.",
        "description": "Kubernetes, Terraform, AWS and Docker. On-call rotation shared across the team.",
        "perks": {"pension": True},
        "apply_url": "https://example.com/apply/job-005",
        "source": "internal",
    },
]


async def seed_jobs(dry_run: bool = False) -> int:
    """Insert SAMPLE_JOBS that are not yet stored. Returns the number inserted."""
    jobs = [JobCreate(**data) for data in SAMPLE_JOBS]

    async with async_session() as session:
        existing = await get_existing_external_ids(session, [j.external_id for j in jobs])
        pending = [j for j in jobs if j.external_id not in existing]

        if dry_run:
            for job in pending:
                logger.info(f"Would insert: {job.title} @ {job.company_name}")
            return 0

        for job in pending:
            created = await create_job(session, job.model_dump())
            logger.info(f"Inserted job {created.id}: {created.title}")

    logger.info(f"Skipped {len(existing)} existing job(s)")
    return len(pending)


# ==============================================================================
# Main
# ==============================================================================

async def main() -> None:
    parser = argparse.ArgumentParser(description="Seed sample job postings")
    parser.add_argument("--dry-run", action="store_true", help="Only list jobs that would be inserted")
    args = parser.parse_args()

    await init_db()
    count = await seed_jobs(dry_run=args.dry_run)
    logger.info(f"Seeded {count} job(s)")


if __name__ == "__main__":
    asyncio.run(main())
