from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session, select
from taskwheel.core.security import decode_access_token
from taskwheel.db.session import get_session
from taskwheel.models.user import User
from taskwheel.schemas.user import TokenData


security = HTTPBearer()


def get_current_user(token: HTTPAuthorizationCredentials = Depends(security), session: Session = Depends(get_session)) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    username = decode_access_token(token.credentials)
    if username is None:
        raise credentials_exception
    token_data = TokenData(username=username)

    statement = select(User).where(User.email == token_data.username)
    user = session.exec(statement).first()

    if user is None:
        raise credentials_exception

    return user


def get_owned(session: Session, model, object_id, current_user: User, name: str):
    """Fetch a row by id and check it belongs to the current user."""
    obj = session.get(model, object_id)
    if not obj:
        raise HTTPException(status_code=404, detail=f"{name} not found")
    if obj.user_id != current_user.id:
        raise HTTPException(status_code=403, detail="Not authorized")
    return obj
