from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import select
from finboard.api.deps import db, current_user
from finboard.schemas.auth import RegisterIn, LoginIn, TokenOut, UserOut
from finboard.models.user import User
from finboard.core.security import hash_password, verify_password, create_access_token
from finboard.services.audit import log_event

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=UserOut, status_code=201)
def register(body: RegisterIn, s: Session = Depends(db)):
    exists = s.execute(select(User).where(User.email == body.email)).scalar_one_or_none()
    if exists:
        raise HTTPException(status_code=409, detail="email_exists")
    user = User(email=body.email, name=body.name, password_hash=hash_password(body.password))
    s.add(user)
    s.commit()
    s.refresh(user)
    log_event(s, user_id=user.id, action="user.register", entity_type="user", entity_id=user.id, details={"email": user.email})
    return user

@router.post("/login", response_model=TokenOut)
def login(body: LoginIn, s: Session = Depends(db)):
    email = (body.email or "").strip().lower()
    u = s.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if not u or not verify_password(body.password, u.password_hash):
        raise HTTPException(status_code=401, detail="bad_credentials")
    token = create_access_token(sub=str(u.id))
    return {"access_token": token, "user": u}

@router.get("/me", response_model=UserOut)
def me(u: User = Depends(current_user)):
    return u
