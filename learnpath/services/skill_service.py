"""
Skill catalogue service: listing, lookup and the default seed.

The default catalogue is the Backend Developer → ML Engineer path:
six skills across three phases, five prerequisite edges and a handful of
curated resources. ``seed_skills`` is idempotent; existing slugs, edges and
resource URLs are left untouched.
"""

import logging

from learnpath.core.constants import PHASE_ORDER
from learnpath.core.exceptions import BadRequestError, NotFoundError
from learnpath.models import db
from learnpath.models.skill import Resource, Skill, SkillDependency

logger = logging.getLogger(__name__)


# ── Default catalogue ────────────────────────────────────────────────────────

SEED_SKILLS = [
    {
        "name": "Python for ML",
        "slug": "python-ml",
        "description": "Python fundamentals for machine learning including NumPy, Pandas, and data manipulation",
        "phase": "foundation",
        "estimated_hours": 8,
        "sequence_order": 1,
    },
    {
        "name": "Math Foundations",
        "slug": "math-foundations",
        "description": "Linear algebra, calculus, and statistics fundamentals for ML",
        "phase": "foundation",
        "estimated_hours": 12,
        "sequence_order": 2,
    },
    {
        "name": "Data Preprocessing",
        "slug": "data-preprocessing",
        "description": "Data cleaning, feature engineering, and preprocessing techniques",
        "phase": "foundation",
        "estimated_hours": 6,
        "sequence_order": 3,
    },
    {
        "name": "ML Algorithms",
        "slug": "ml-algorithms",
        "description": "Core machine learning algorithms: regression, classification, clustering",
        "phase": "intermediate",
        "estimated_hours": 15,
        "sequence_order": 4,
    },
    {
        "name": "Deep Learning Fundamentals",
        "slug": "deep-learning-fundamentals",
        "description": "Neural networks, backpropagation, and deep learning basics",
        "phase": "intermediate",
        "estimated_hours": 20,
        "sequence_order": 5,
    },
    {
        "name": "Model Deployment",
        "slug": "model-deployment",
        "description": "MLOps, model serving, and production deployment",
        "phase": "advanced",
        "estimated_hours": 10,
        "sequence_order": 6,
    },
]

# (skill slug, prerequisite slug, is_hard)
SEED_DEPENDENCIES = [
    ("data-preprocessing", "python-ml", True),
    ("ml-algorithms", "math-foundations", True),
    ("ml-algorithms", "data-preprocessing", True),
    ("deep-learning-fundamentals", "ml-algorithms", True),
    ("model-deployment", "deep-learning-fundamentals", False),
]

SEED_RESOURCES = {
    "python-ml": [
        {
            "title": "Python for Data Science - freeCodeCamp",
            "url": "https://www.freecodecamp.org/learn/data-analysis-with-python/",
            "type": "course", "provider": "freeCodeCamp",
            "duration_minutes": 300, "is_free": True, "quality": 5,
        },
        {
            "title": "NumPy Quickstart Tutorial",
            "url": "https://numpy.org/doc/stable/user/quickstart.html",
            "type": "documentation", "provider": "NumPy",
            "duration_minutes": 60, "is_free": True, "quality": 4,
        },
    ],
    "math-foundations": [
        {
            "title": "Khan Academy - Linear Algebra",
            "url": "https://www.khanacademy.org/math/linear-algebra",
            "type": "course", "provider": "Khan Academy",
            "duration_minutes": 600, "is_free": True, "quality": 5,
        },
        {
            "title": "3Blue1Brown - Essence of Linear Algebra",
            "url": "https://www.youtube.com/playlist?list=PLZHQObOWTQDPD3MizzM2xVFitgF8hE_ab",
            "type": "video", "provider": "YouTube",
            "duration_minutes": 180, "is_free": True, "quality": 5,
        },
    ],
    "ml-algorithms": [
        {
            "title": "Scikit-learn Tutorial",
            "url": "https://scikit-learn.org/stable/tutorial/index.html",
            "type": "documentation", "provider": "Scikit-learn",
            "duration_minutes": 240, "is_free": True, "quality": 5,
        },
    ],
    "deep-learning-fundamentals": [
        {
            "title": "Deep Learning Specialization - Andrew Ng",
            "url": "https://www.coursera.org/specializations/deep-learning",
            "type": "course", "provider": "Coursera",
            "duration_minutes": 4800, "is_free": False, "quality": 5,
        },
    ],
}


# ═══════════════════════════════════════════════════════════════
# Queries
# ═══════════════════════════════════════════════════════════════

def list_skills(phase=None):
    """Catalogue in sequence order, optionally narrowed to one phase."""
    query = Skill.query
    if phase:
        if phase not in PHASE_ORDER:
            raise BadRequestError(f"phase must be one of: {', '.join(PHASE_ORDER)}")
        query = query.filter_by(phase=phase)
    return query.order_by(Skill.sequence_order, Skill.id).all()


def get_skill_by_slug(slug):
    skill = Skill.query.filter_by(slug=slug).first()
    if skill is None:
        raise NotFoundError("Skill not found")
    return skill


def skill_detail(skill):
    """Skill with resources and both directions of its prerequisite edges."""
    data = skill.to_dict(include_resources=True)
    data["prerequisites"] = [
        {**dep.depends_on.to_dict(), "is_hard": dep.is_hard} for dep in skill.prerequisites
    ]
    data["dependents"] = [
        {**dep.skill.to_dict(), "is_hard": dep.is_hard} for dep in skill.dependents
    ]
    return data


# ═══════════════════════════════════════════════════════════════
# Seed
# ═══════════════════════════════════════════════════════════════

def seed_skills():
    """Insert the default catalogue. Returns counts of newly created rows."""
    created = {"skills": 0, "dependencies": 0, "resources": 0}

    by_slug = {s.slug: s for s in Skill.query.all()}
    for data in SEED_SKILLS:
        if data["slug"] in by_slug:
            continue
        skill = Skill(**data)
        db.session.add(skill)
        by_slug[skill.slug] = skill
        created["skills"] += 1
    db.session.flush()

    existing_edges = {(d.skill_id, d.depends_on_id) for d in SkillDependency.query.all()}
    for slug, prereq_slug, is_hard in SEED_DEPENDENCIES:
        edge = (by_slug[slug].id, by_slug[prereq_slug].id)
        if edge in existing_edges:
            continue
        db.session.add(SkillDependency(skill_id=edge[0], depends_on_id=edge[1], is_hard=is_hard))
        created["dependencies"] += 1

    existing_urls = {(r.skill_id, r.url) for r in Resource.query.all()}
    for slug, resources in SEED_RESOURCES.items():
        skill = by_slug[slug]
        for data in resources:
            if (skill.id, data["url"]) in existing_urls:
                continue
            db.session.add(Resource(skill_id=skill.id, **data))
            created["resources"] += 1

    db.session.commit()
    logger.info(
        "Seeded skill catalogue: %d skills, %d dependencies, %d resources",
        created["skills"], created["dependencies"], created["resources"],
    )
    return created
