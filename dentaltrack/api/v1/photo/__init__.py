from dentaltrack.api.v1.photo.routes import router

__all__ = ["router"]
