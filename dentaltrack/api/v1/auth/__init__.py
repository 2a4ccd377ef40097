from dentaltrack.api.v1.auth.routes import router

__all__ = ["router"]
