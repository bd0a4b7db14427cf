"""
LearnPath API
Blueprint registry.
"""

from flask import request


def paginate_query(query, default_limit=50, max_limit=200):
    """Apply limit/offset pagination to a SQLAlchemy query.

    Query params:
        limit: max items (default 50, capped at max_limit)
        offset: starting position (default 0)

    Returns:
        (items_list, total_count)
    """
    total = query.count()
    try:
        limit = min(max(int(request.args.get("limit", default_limit)), 1), max_limit)
    except (ValueError, TypeError):
        limit = default_limit
    try:
        offset = max(int(request.args.get("offset", 0)), 0)
    except (ValueError, TypeError):
        offset = 0
    items = query.limit(limit).offset(offset).all()
    return items, total


def register_blueprints(app):
    from learnpath.blueprints.auth_bp import auth_bp
    from learnpath.blueprints.checkin_bp import checkin_bp
    from learnpath.blueprints.feedback_bp import feedback_bp
    from learnpath.blueprints.health_bp import health_bp
    from learnpath.blueprints.onboarding_bp import onboarding_bp
    from learnpath.blueprints.progress_bp import progress_bp
    from learnpath.blueprints.roadmap_bp import roadmap_bp
    from learnpath.blueprints.skill_bp import skill_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(onboarding_bp)
    app.register_blueprint(roadmap_bp)
    app.register_blueprint(progress_bp)
    app.register_blueprint(checkin_bp)
    app.register_blueprint(feedback_bp)
    app.register_blueprint(skill_bp)
