import uuid

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.orm import Session
from finboard.db.session import SessionLocal
from finboard.core.security import decode_token
from finboard.models.user import User

bearer = HTTPBearer()

def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()

def current_user(creds: HTTPAuthorizationCredentials = Depends(bearer), s: Session = Depends(db)) -> User:
    try:
        payload = decode_token(creds.credentials)
        user_id = uuid.UUID(str(payload.get("sub")))
    except (jwt.PyJWTError, ValueError):
        raise HTTPException(status_code=401, detail="invalid_token")
    u = s.execute(select(User).where(User.id == user_id)).scalar_one_or_none()
    if u is None:
        raise HTTPException(status_code=401, detail="invalid_token")
    return u
