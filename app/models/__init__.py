from app.models.team import Team

__all__ = [
    "Team",
]
