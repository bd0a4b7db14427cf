"""initial_schema

Users, subscriptions, onboarding, skill catalogue, roadmaps, progress,
weekly check-ins and feedback.

Revision ID: a1c4e2f90b17
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "a1c4e2f90b17"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=True),
        sa.Column("avatar_url", sa.String(length=500), nullable=True),
        sa.Column("trial_start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("trial_end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("email_verified", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "subscriptions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=30), nullable=False),
        sa.Column("plan", sa.String(length=20), nullable=False),
        sa.Column("current_period_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("current_period_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancel_at_period_end", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('active', 'canceled', 'incomplete', 'incomplete_expired', "
            "'past_due', 'trialing', 'unpaid')",
            name="ck_subscriptions_status",
        ),
        sa.CheckConstraint("plan IN ('free', 'pro')", name="ck_subscriptions_plan"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )

    op.create_table(
        "onboarding_states",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("current_step", sa.Integer(), nullable=False),
        sa.Column("current_role", sa.String(length=100), nullable=True),
        sa.Column("target_role", sa.String(length=100), nullable=True),
        sa.Column("weekly_hours", sa.Integer(), nullable=True),
        sa.Column("existing_skills", sa.JSON(), nullable=False),
        sa.Column("is_complete", sa.Boolean(), nullable=False),
        sa.Column("is_skipped", sa.Boolean(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("current_step >= 1 AND current_step <= 4", name="ck_onboarding_step_range"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_onboarding_states_user_id", "onboarding_states", ["user_id"], unique=True)

    op.create_table(
        "skills",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("why_this_matters", sa.Text(), nullable=True),
        sa.Column("phase", sa.String(length=20), nullable=False),
        sa.Column("estimated_hours", sa.Float(), nullable=False),
        sa.Column("is_optional", sa.Boolean(), nullable=False),
        sa.Column("sequence_order", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("phase IN ('foundation', 'intermediate', 'advanced')", name="ck_skills_phase"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_skills_slug", "skills", ["slug"], unique=True)

    op.create_table(
        "skill_dependencies",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("skill_id", sa.Integer(), nullable=False),
        sa.Column("depends_on_id", sa.Integer(), nullable=False),
        sa.Column("is_hard", sa.Boolean(), nullable=False),
        sa.CheckConstraint("skill_id <> depends_on_id", name="ck_skill_dependency_no_self"),
        sa.ForeignKeyConstraint(["skill_id"], ["skills.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["depends_on_id"], ["skills.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("skill_id", "depends_on_id", name="uq_skill_dependency"),
    )
    op.create_index("ix_skill_dependencies_skill_id", "skill_dependencies", ["skill_id"])
    op.create_index("ix_skill_dependencies_depends_on_id", "skill_dependencies", ["depends_on_id"])

    op.create_table(
        "resources",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("skill_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("url", sa.String(length=1000), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("provider", sa.String(length=100), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("is_free", sa.Boolean(), nullable=False),
        sa.Column("quality", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "type IN ('video', 'article', 'course', 'book', 'tutorial', "
            "'documentation', 'exercise', 'project')",
            name="ck_resources_type",
        ),
        sa.CheckConstraint("quality >= 1 AND quality <= 5", name="ck_resources_quality"),
        sa.ForeignKeyConstraint(["skill_id"], ["skills.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_resources_skill_id", "resources", ["skill_id"])

    op.create_table(
        "roadmaps",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("source_role", sa.String(length=100), nullable=False),
        sa.Column("target_role", sa.String(length=100), nullable=False),
        sa.Column("total_estimated_hours", sa.Float(), nullable=False),
        sa.Column("completed_hours", sa.Float(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_roadmaps_user_id", "roadmaps", ["user_id"])
    op.create_index("ix_roadmaps_is_active", "roadmaps", ["is_active"])
    op.create_index("ix_roadmaps_deleted_at", "roadmaps", ["deleted_at"])

    op.create_table(
        "roadmap_modules",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("roadmap_id", sa.Integer(), nullable=False),
        sa.Column("skill_id", sa.Integer(), nullable=False),
        sa.Column("phase", sa.String(length=20), nullable=False),
        sa.Column("sequence_order", sa.Integer(), nullable=False),
        sa.Column("is_locked", sa.Boolean(), nullable=False),
        sa.Column("is_skipped", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["roadmap_id"], ["roadmaps.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["skill_id"], ["skills.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("roadmap_id", "sequence_order", name="uq_roadmap_module_sequence"),
        sa.CheckConstraint(
            "phase IN ('foundation', 'intermediate', 'advanced')", name="ck_roadmap_modules_phase",
        ),
    )
    op.create_index("ix_roadmap_modules_roadmap_id", "roadmap_modules", ["roadmap_id"])

    op.create_table(
        "progress",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("roadmap_module_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("time_spent_minutes", sa.Integer(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('not_started', 'in_progress', 'completed', 'skipped')",
            name="ck_progress_status",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["roadmap_module_id"], ["roadmap_modules.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "roadmap_module_id", name="uq_progress_user_module"),
    )
    op.create_index("ix_progress_user_id", "progress", ["user_id"])
    op.create_index("ix_progress_roadmap_module_id", "progress", ["roadmap_module_id"])

    op.create_table(
        "weekly_checkins",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("week_start_date", sa.Date(), nullable=False),
        sa.Column("hours_spent", sa.Float(), nullable=False),
        sa.Column("challenges_faced", sa.Text(), nullable=True),
        sa.Column("wins_achieved", sa.Text(), nullable=True),
        sa.Column("focus_next_week", sa.Text(), nullable=True),
        sa.Column("motivation_level", sa.Integer(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "week_start_date", name="uq_checkin_user_week"),
    )
    op.create_index("ix_weekly_checkins_user_id", "weekly_checkins", ["user_id"])
    op.create_index("ix_weekly_checkins_deleted_at", "weekly_checkins", ["deleted_at"])

    op.create_table(
        "feedback",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("category", sa.String(length=30), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "type IN ('bug', 'feature_request', 'general', 'resource_quality', "
            "'content_suggestion')",
            name="ck_feedback_type",
        ),
        sa.CheckConstraint(
            "category IN ('roadmap', 'resources', 'ui_ux', 'performance', 'other')",
            name="ck_feedback_category",
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'reviewed', 'in_progress', 'resolved', 'closed')",
            name="ck_feedback_status",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_feedback_user_id", "feedback", ["user_id"])


def downgrade():
    for table in (
        "feedback",
        "weekly_checkins",
        "progress",
        "roadmap_modules",
        "roadmaps",
        "resources",
        "skill_dependencies",
        "skills",
        "onboarding_states",
        "subscriptions",
        "users",
    ):
        op.drop_table(table)
