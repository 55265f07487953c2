# scripts/seed.py

import os
import sys
import argparse
from datetime import date

from dotenv import load_dotenv
from sqlmodel import Session, select

# Ensure root path for relative imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.database import engine, create_db_and_tables
from models.models import Project, ProjectStatus, TeamMember
from schemas.article_schema import ArticleCreate
from schemas.project_schema import ProjectCreate
from services.article_service import create_article
from services.category_service import ensure_category
from services.project_service import create_project

# ✅ Load environment variables
load_dotenv()


DEMO_MEMBERS = [
    {"full_name": "Anna Petrova", "position": "Festival director", "sort_order": 0},
    {"full_name": "Ivan Sokolov", "position": "Workshop lead", "sort_order": 1},
    {"full_name": "Maria Orlova", "position": "Photographer", "sort_order": 2},
]

DEMO_PROJECTS = [
    ProjectCreate(
        title="Snow Maiden of the Year",
        category="festival",
        status=ProjectStatus.ANNUAL,
        short_description="Winter festival and costume contest",
        location="Town Hall",
        start_date=date(2025, 12, 1),
        end_date=date(2025, 12, 31),
        event_date=date(2025, 12, 20),
    ),
    ProjectCreate(
        title="Pottery Workshop",
        category="workshop",
        status=ProjectStatus.ACTIVE,
        short_description="Weekly clay sessions for all ages",
        location="Community Center",
        start_date=date(2025, 9, 1),
        end_date=date(2026, 5, 31),
    ),
    ProjectCreate(
        title="Spring Clean-up",
        category="volunteering",
        status=ProjectStatus.PLANNED,
        start_date=date(2026, 4, 10),
        end_date=date(2026, 4, 12),
    ),
]


def seed_dev_data():
    """Seed development database with demo categories, team members, projects and articles."""
    print("🌱 Seeding development data...")
    create_db_and_tables()

    with Session(engine) as session:
        # -----------------------------
        # 🏷️ Categories
        # -----------------------------
        for name in ("festival", "workshop", "volunteering"):
            ensure_category(session, name)
        session.commit()
        print("✅ Categories ready")

        # -----------------------------
        # 👥 Team Members
        # -----------------------------
        members = []
        for data in DEMO_MEMBERS:
            member = session.exec(select(TeamMember).where(TeamMember.full_name == data["full_name"])).first()
            if not member:
                member = TeamMember(**data)
                session.add(member)
                session.commit()
                session.refresh(member)
                print(f"✅ Added team member {member.full_name}")
            members.append(member)

        # -----------------------------
        # 📁 Projects
        # -----------------------------
        for data in DEMO_PROJECTS:
            existing = session.exec(select(Project).where(Project.title == data.title)).first()
            if existing:
                continue
            project = create_project(session, data, team_members=members[:2])
            print(f"✅ Added project {project.title} ({project.slug})")

            # -----------------------------
            # 📰 Announcement article
            # -----------------------------
            article = create_article(
                session,
                project.id,
                ArticleCreate(
                    title=f"{project.title}: announcement",
                    content=f"<p>{data.short_description or project.title}</p>",
                    publish=project.status_enum.is_public,
                ),
            )
            print(f"✅ Added article {article.slug} ({article.status})")

    print("🌱 Development data seeding complete.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the Community CMS database.")
    parser.add_argument(
        "--env",
        choices=["dev"],
        default="dev",
        help="Select environment to seed",
    )
    args = parser.parse_args()

    if args.env == "dev":
        seed_dev_data()
