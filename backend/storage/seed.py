# backend/storage/seed.py
import logging
from datetime import datetime, timezone

from config import settings
from schemas.achievement import AchievementCreate
from schemas.project import ProjectCreate
from schemas.tool import ToolCreate

logger = logging.getLogger(__name__)

# Admin profile written on first start; credentials come from settings
ADMIN_PROFILE = {
    "avatar": None,
    "about_photo": None,
    "about_text": "Full-stack developer and UI/UX designer building digital products "
                  "that turn complex ideas into simple experiences.",
    "about_description": "Working mostly with React, Python and interface design.",
    "hero_subtitle": "Full Stack Developer & UI/UX Designer",
    "skills": ["React", "Python", "FastAPI", "TypeScript", "Figma", "AWS"],
}

SAMPLE_PROJECTS = [
    ProjectCreate(
        title="E-commerce Platform",
        description="Online store with admin dashboard, payments and stock management.",
        full_description="Complete e-commerce platform with authentication, shopping cart, "
                         "card payments, an administration panel for products and orders "
                         "and product reviews.",
        category="Web App",
        tags=["React", "FastAPI", "PostgreSQL", "Stripe API", "JWT"],
        technologies=["React", "FastAPI", "PostgreSQL"],
        image_url="https://images.unsplash.com/photo-1563013544-824ae1b704d3?w=800&h=500",
        demo_url="https://demo.example.com",
        github_url="https://github.com/example/ecommerce",
        is_published=True,
        is_featured=True,
    ),
    ProjectCreate(
        title="FinTech Mobile App",
        description="Design and prototype of a personal finance mobile app.",
        full_description="Mobile app for personal finance with automatic expense "
                         "categories, charts, savings goals and bank integrations.",
        category="Mobile",
        tags=["Figma", "React Native", "UI/UX"],
        technologies=["React Native", "Figma"],
        image_url="https://images.unsplash.com/photo-1512941937669-90a1b58e7e9c?w=800&h=500",
        demo_url="https://demo.example.com",
        is_published=True,
        is_featured=True,
    ),
    ProjectCreate(
        title="Analytics Dashboard",
        description="Interactive dashboard for business data with live reports.",
        full_description="Business analytics dashboard with interactive charts, advanced "
                         "filters, scheduled reports and multiple data sources.",
        category="Dashboard",
        tags=["Vue.js", "D3.js", "Python"],
        technologies=["Vue.js", "D3.js", "Python"],
        image_url="https://images.unsplash.com/photo-1551288049-bebda4e38f71?w=800&h=500",
        is_published=True,
        is_featured=False,
    ),
]

SAMPLE_ACHIEVEMENTS = [
    AchievementCreate(
        title="Best UI/UX 2023",
        description="Best user interface award at a national design competition",
        icon="trophy",
        date=datetime(2023, 11, 15, tzinfo=timezone.utc),
        is_featured=True,
    ),
    AchievementCreate(
        title="AWS Certification",
        description="AWS Solutions Architect Associate",
        icon="code",
        date=datetime(2023, 10, 20, tzinfo=timezone.utc),
        is_featured=True,
    ),
    AchievementCreate(
        title="TechConf Speaker",
        description="Keynote on modern full-stack development",
        icon="users",
        date=datetime(2023, 9, 10, tzinfo=timezone.utc),
    ),
    AchievementCreate(
        title="MSc in Information Technology",
        description="Master's degree in IT with a focus on artificial intelligence",
        icon="graduation-cap",
        date=datetime(2023, 7, 1, tzinfo=timezone.utc),
    ),
]

DEVICON = "https://cdn.jsdelivr.net/gh/devicons/devicon/icons"

SAMPLE_TOOLS = [
    ToolCreate(name="React", icon_url=f"{DEVICON}/react/react-original.svg",
               category="Frontend", website="https://react.dev", is_featured=True, order=1),
    ToolCreate(name="Python", icon_url=f"{DEVICON}/python/python-original.svg",
               category="Backend", website="https://www.python.org", is_featured=True, order=2),
    ToolCreate(name="TypeScript", icon_url=f"{DEVICON}/typescript/typescript-original.svg",
               category="Language", website="https://www.typescriptlang.org", is_featured=True, order=3),
    ToolCreate(name="PostgreSQL", icon_url=f"{DEVICON}/postgresql/postgresql-original.svg",
               category="Database", website="https://www.postgresql.org", is_featured=True, order=4),
    ToolCreate(name="Figma", icon_url=f"{DEVICON}/figma/figma-original.svg",
               category="Design", website="https://www.figma.com", is_featured=True, order=5),
    ToolCreate(name="AWS", icon_url=f"{DEVICON}/amazonwebservices/amazonwebservices-original.svg",
               category="Cloud", website="https://aws.amazon.com", order=6),
]


def admin_credentials():
    return settings.ADMIN_EMAIL.strip().lower(), settings.ADMIN_PASSWORD, settings.ADMIN_NAME


def seed_sample_content(storage) -> int:
    """Fill an empty store with showcase content. Returns the number of rows created.

    Like counters start at zero so they match the (empty) likes table.
    """
    if storage.get_projects() or storage.get_achievements() or storage.get_tools():
        logger.info("Store already has content, skipping sample data")
        return 0

    created = 0
    for project in SAMPLE_PROJECTS:
        storage.create_project(project)
        created += 1
    for achievement in SAMPLE_ACHIEVEMENTS:
        storage.create_achievement(achievement)
        created += 1
    for tool in SAMPLE_TOOLS:
        storage.create_tool(tool)
        created += 1

    logger.info("Inserted %d sample rows", created)
    return created
