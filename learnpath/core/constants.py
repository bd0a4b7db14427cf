"""Shared domain constants: phases, subscription tiers, enumerations."""

# ── Phases ───────────────────────────────────────────────────────────────────

FOUNDATION = "foundation"
INTERMEDIATE = "intermediate"
ADVANCED = "advanced"

PHASE_ORDER = [FOUNDATION, INTERMEDIATE, ADVANCED]

PHASE_LABELS = {
    FOUNDATION: "Foundation",
    INTERMEDIATE: "Intermediate",
    ADVANCED: "Advanced",
}

# ── Subscription tiers ───────────────────────────────────────────────────────

TIER_FREE = "free"
TIER_TRIAL = "trial"
TIER_PRO = "pro"

# Which tiers may open content in each phase
PHASE_ACCESS = {
    FOUNDATION: (TIER_TRIAL, TIER_PRO),
    INTERMEDIATE: (TIER_PRO,),
    ADVANCED: (TIER_PRO,),
}

SUBSCRIPTION_PLANS = ("free", "pro")
SUBSCRIPTION_STATUSES = (
    "active",
    "canceled",
    "incomplete",
    "incomplete_expired",
    "past_due",
    "trialing",
    "unpaid",
)

# ── Progress / content enums ─────────────────────────────────────────────────

PROGRESS_STATUSES = ("not_started", "in_progress", "completed", "skipped")

RESOURCE_TYPES = (
    "video",
    "article",
    "course",
    "book",
    "tutorial",
    "documentation",
    "exercise",
    "project",
)

FEEDBACK_TYPES = ("bug", "feature_request", "general", "resource_quality", "content_suggestion")
FEEDBACK_CATEGORIES = ("roadmap", "resources", "ui_ux", "performance", "other")
FEEDBACK_STATUSES = ("pending", "reviewed", "in_progress", "resolved", "closed")

# ── Onboarding ───────────────────────────────────────────────────────────────

ONBOARDING_TOTAL_STEPS = 4


def phase_index(phase: str) -> int:
    """Position of a phase in PHASE_ORDER; unknown phases sort last."""
    try:
        return PHASE_ORDER.index(phase)
    except ValueError:
        return len(PHASE_ORDER)
