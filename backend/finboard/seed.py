import os
from sqlalchemy import select
from finboard.db.session import SessionLocal
from finboard.models.user import User
from finboard.core.security import hash_password

def main():
    email = os.environ.get("SEED_USER_EMAIL", "demo@example.com").strip().lower()
    password = os.environ.get("SEED_USER_PASS", "demo1234")
    name = os.environ.get("SEED_USER_NAME", "Demo")

    db = SessionLocal()
    try:
        existing = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
        if existing:
            return
        db.add(User(email=email, name=name, password_hash=hash_password(password)))
        db.commit()
    finally:
        db.close()

if __name__ == "__main__":
    main()
