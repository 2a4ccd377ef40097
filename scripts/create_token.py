"""
Génère un token JWT d'accès pour un utilisateur existant.

Usage:
    python scripts/create_token.py dr.smith@dentaltrack.com
    python scripts/create_token.py admin@dentaltrack.com --minutes 120

Le token s'utilise ensuite dans le header :
    Authorization: Bearer <token>
"""

import argparse
import sys
from datetime import timedelta

from sqlalchemy import select, func

from dentaltrack.core.security.jwt import create_user_token
from dentaltrack.database.session import db_session
from dentaltrack.models import User


def main() -> int:
    parser = argparse.ArgumentParser(description="Génère un token JWT DentalTrack")
    parser.add_argument("email", help="Email de l'utilisateur")
    parser.add_argument("--minutes", type=int, default=None, help="Durée de validité")
    args = parser.parse_args()

    with db_session() as db:
        user = db.scalar(select(User).where(func.lower(User.email) == args.email.lower()))
        if user is None:
            print(f"Utilisateur introuvable : {args.email}", file=sys.stderr)
            return 1
        if not user.is_active:
            print(f"Compte désactivé : {args.email}", file=sys.stderr)
            return 1

        expires = timedelta(minutes=args.minutes) if args.minutes else None
        token = create_user_token(user, expires_delta=expires)
        user.record_login()

    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
