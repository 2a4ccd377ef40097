from dentaltrack.core.auth.user_auth import get_current_user, require_permission

__all__ = ["get_current_user", "require_permission"]
