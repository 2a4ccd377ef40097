from dentaltrack.api.v1.treatment.routes import router

__all__ = ["router"]
