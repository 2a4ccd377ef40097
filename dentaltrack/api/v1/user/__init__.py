from dentaltrack.api.v1.user.routes import router

__all__ = ["router"]
