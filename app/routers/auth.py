from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.auth import SessionTokenCodec, get_current_user_id, get_session_codec
from app.database import get_db
from app.errors import InvalidRequest, NotFound, Unauthenticated
from app.schemas.user import GoogleSignInRequest, SignedInUser, SignInResponse, UserResponse
from app.services.google_auth import GoogleIdentityVerifier, get_identity_verifier
from app.services.user_directory import get_user, resolve_or_create_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/google", response_model=SignInResponse)
async def google_sign_in(
    body: GoogleSignInRequest,
    db: Session = Depends(get_db),
    verifier: GoogleIdentityVerifier = Depends(get_identity_verifier),
    codec: SessionTokenCodec = Depends(get_session_codec),
):
    """Exchange a Google id_token for our session token. Creates the account on first sign-in."""
    if not body.id_token:
        raise InvalidRequest("id_token is required")

    identity = await verifier.verify(body.id_token)
    if not identity:
        raise Unauthenticated()

    user_id = resolve_or_create_user(db, identity.email, identity.name, identity.picture)
    token = codec.issue(user_id, identity.email)
    return SignInResponse(
        token=token,
        user=SignedInUser(id=user_id, email=identity.email, name=identity.name),
    )


@router.get("/me", response_model=UserResponse)
def get_me(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    user = get_user(db, user_id)
    if not user:
        raise NotFound("User not found")
    return user
