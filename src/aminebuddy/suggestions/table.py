"""Static suggestion table.

Page metadata and trigger keywords are hand-authored; changing them is a
code change. Iteration order of PAGE_KEYWORDS decides which page wins
when several match, so entries must stay in declaration order.
"""

from typing import Final

from .models import PageSuggestion

PAGE_SUGGESTIONS: Final[dict[str, PageSuggestion]] = {
    "/about": PageSuggestion(
        title="About Me",
        href="/about",
        description="Learn more about Amine"
    ),
    "/projects": PageSuggestion(
        title="Projects",
        href="/projects",
        description="View Amine's projects"
    ),
    "/skills-tools": PageSuggestion(
        title="Skills & Tools",
        href="/skills-tools",
        description="See Amine's skills and technologies"
    ),
    "/experience": PageSuggestion(
        title="Experience",
        href="/experience",
        description="View Amine's work experience"
    ),
    "/education": PageSuggestion(
        title="Education",
        href="/education",
        description="See Amine's educational background"
    ),
    "/contact": PageSuggestion(
        title="Contact",
        href="/contact",
        description="Get in touch with Amine"
    ),
    "/stats": PageSuggestion(
        title="Stats",
        href="/stats",
        description="View GitHub stats and metrics"
    ),
}

PAGE_KEYWORDS: Final[dict[str, tuple[str, ...]]] = {
    "/about": (
        "about", "who", "introduction", "background", "bio", "biography",
        "personal", "myself", "introduce", "overview",
    ),
    "/projects": (
        "project", "projects", "work", "portfolio", "built", "developed",
        "application", "app", "software", "website", "application",
        "github", "repository", "repo", "code", "coding",
    ),
    "/skills-tools": (
        "skill", "skills", "tool", "tools", "technology", "technologies",
        "tech", "stack", "expertise", "proficient", "know", "language",
        "framework", "library", "programming", "coding", "technical",
    ),
    "/experience": (
        "experience", "work", "job", "career", "employment", "position",
        "role", "intelswift", "company", "employer", "professional",
        "workplace", "responsibilities", "duties",
    ),
    "/education": (
        "education", "degree", "university", "college", "school", "study",
        "studied", "graduate", "diploma", "certificate", "academic",
        "qualification", "learning",
    ),
    "/contact": (
        "contact", "email", "reach", "connect", "message", "send",
        "get in touch", "communication", "hire", "collaborate",
    ),
    "/stats": (
        "stats", "statistics", "github", "contributions", "activity",
        "metrics", "analytics", "data", "numbers",
    ),
}

# (trigger terms, page) applied after keyword matching, in this order
FORCED_INCLUSIONS: Final[tuple[tuple[tuple[str, ...], str], ...]] = (
    (("project",), "/projects"),
    (("skill", "tech"), "/skills-tools"),
    (("experience", "work", "intelswift"), "/experience"),
)

MAX_SUGGESTIONS: Final[int] = 3
