from dentaltrack.api.v1.analysis.routes import router

__all__ = ["router"]
