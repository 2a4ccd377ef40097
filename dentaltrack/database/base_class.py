"""
Classe de base SQLAlchemy
Fichier séparé pour éviter les imports circulaires
"""
from sqlalchemy.orm import DeclarativeBase


# Classe dont héritent tous les modèles
class Base(DeclarativeBase):
    pass
