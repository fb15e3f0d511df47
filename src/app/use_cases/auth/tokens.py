from src.api.utils.jwt import TokenPayload
from src.domain.entities import User


def token_payload_for(user: User) -> TokenPayload:
    """Identity claims for a user, read fresh from the row"""
    return TokenPayload(
        user_id=str(user.id),
        email=user.email,
        role=user.role.value,
        company_id=str(user.company_id),
    )
