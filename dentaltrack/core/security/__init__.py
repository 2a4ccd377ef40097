from dentaltrack.core.security.jwt import create_access_token, create_user_token, verify_token

__all__ = ["create_access_token", "create_user_token", "verify_token"]
