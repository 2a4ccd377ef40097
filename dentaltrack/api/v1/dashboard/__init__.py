from dentaltrack.api.v1.dashboard.routes import router

__all__ = ["router"]
